"""
API routes for component media (Supabase storage).

Uploads may be converted first (resize + re-encode with Pillow). GIFs and
non-image files are stored unchanged.
"""

import logging
from typing import Dict, Any, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.core.enums import ImageFormat
from landing_builder.core.exceptions import ImageConversionError
from landing_builder.dependencies import get_db
from landing_builder.schemas.media import MediaUploadResult
from landing_builder.services.image_converter import (
    convert_image,
    format_file_size,
    is_image_content_type,
    recommended_options,
)
from landing_builder.services.media_service import MediaService

router = APIRouter(prefix="/api/components", tags=["media"])

logger = logging.getLogger(__name__)


@router.post("/{component_id}/media/{field}", response_model=MediaUploadResult)
async def upload_component_media(
    component_id: str,
    field: str,
    file: UploadFile = File(...),
    convert: bool = Form(True),
    kind: str = Form("general"),
    image_format: Optional[ImageFormat] = Form(None),
    db: AsyncSession = Depends(get_db),
):
    """Store a file for one media slot of a component and bind its public URL"""
    data = await file.read()
    filename = file.filename or f"{field}.bin"
    content_type = file.content_type or "application/octet-stream"

    if convert and is_image_content_type(content_type):
        options = recommended_options(kind)
        if image_format is not None:
            options.format = image_format
        try:
            converted = convert_image(data, filename, content_type, options)
        except ImageConversionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.info(
            f"Converted {filename}: {format_file_size(converted.original_size)} -> "
            f"{format_file_size(converted.compressed_size)} ({converted.compression_ratio}% saved)"
        )
        data, filename, content_type = converted.data, converted.filename, converted.content_type

    media = MediaService(db)
    url = await media.upload_and_set_component_media(data, filename, component_id, field, content_type)
    if url is None:
        return MediaUploadResult(success=False, error=f"Failed to upload media for {field}")
    return MediaUploadResult(success=True, url=url)


@router.delete("/{component_id}/media/{field}")
async def remove_component_media(component_id: str, field: str, db: AsyncSession = Depends(get_db)):
    removed = await MediaService(db).remove_component_media_url(component_id, field)
    return {"success": removed, "field": field}


@router.get("/{component_id}/media")
async def get_component_media(component_id: str, db: AsyncSession = Depends(get_db)) -> Dict[str, Any]:
    return await MediaService(db).get_component_media_urls(component_id)
