"""
Re-encode uploaded images before they go to storage.

Rasters are turned upright from their EXIF orientation, scaled down to fit
the requested box (never up) and written as webp, jpeg or png. GIFs pass
through untouched so animations survive.
"""

import logging
import os
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from landing_builder.core.enums import ImageFormat
from landing_builder.core.exceptions import ImageConversionError

logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    quality: float = 0.9  # 0-1
    max_width: int = 1920
    max_height: int = 1920
    format: ImageFormat = ImageFormat.WEBP


@dataclass
class ConversionResult:
    data: bytes
    filename: str
    content_type: str
    original_size: int
    compressed_size: int
    compression_ratio: int  # integer percent saved; negative if the output grew
    format: str
    width: Optional[int] = None
    height: Optional[int] = None


_RECOMMENDED = {
    "product": ConversionOptions(quality=0.9, max_width=1200, max_height=1200),
    "avatar": ConversionOptions(quality=0.9, max_width=400, max_height=400),
    "banner": ConversionOptions(quality=0.85, max_width=1920, max_height=1080),
}

_PIL_FORMATS = {
    ImageFormat.WEBP: "WEBP",
    ImageFormat.JPEG: "JPEG",
    ImageFormat.PNG: "PNG",
}


def recommended_options(kind: str = "general") -> ConversionOptions:
    """Options tuned for product shots, avatars and banners; anything else gets the general box."""
    preset = _RECOMMENDED.get(kind)
    if preset is None:
        return ConversionOptions()
    return ConversionOptions(preset.quality, preset.max_width, preset.max_height, preset.format)


def is_image_content_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith("image/")


def format_file_size(size: int) -> str:
    """Human readable size, e.g. 1536 -> '1.5 KB'."""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while i < len(units) - 1 and size >= 1024 ** (i + 1):
        i += 1
    value = round(size / 1024 ** i, 2)
    return f"{value:g} {units[i]}"


def fit_within(width: int, height: int, max_width: int, max_height: int):
    """Scale (width, height) down to fit the box, keeping the aspect ratio."""
    if width > max_width:
        height = height * max_width / width
        width = max_width
    if height > max_height:
        width = width * max_height / height
        height = max_height
    return max(1, round(width)), max(1, round(height))


def _is_gif(data: bytes, filename: str, content_type: Optional[str]) -> bool:
    if content_type == "image/gif" or filename.lower().endswith(".gif"):
        return True
    return data[:6] in (b"GIF87a", b"GIF89a")


def convert_image(
    data: bytes,
    filename: str = "image",
    content_type: Optional[str] = None,
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """
    Resize and re-encode an image.

    Args:
        data: Raw file bytes
        filename: Original file name; the extension is replaced
        content_type: Declared MIME type, if known
        options: Target box, quality and format

    Returns:
        ConversionResult with sizes and the integer compression ratio

    Raises:
        ImageConversionError: If the bytes cannot be decoded or encoded
    """
    options = options or ConversionOptions()
    original_size = len(data)

    if _is_gif(data, filename, content_type):
        return ConversionResult(
            data=data,
            filename=filename,
            content_type="image/gif",
            original_size=original_size,
            compressed_size=original_size,
            compression_ratio=0,
            format="gif",
        )

    target = ImageFormat(options.format)
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageConversionError(f"Failed to load image '{filename}': {e}")

    # Apply the EXIF Orientation tag; re-encoding drops it
    img = ImageOps.exif_transpose(img)

    width, height = fit_within(img.width, img.height, options.max_width, options.max_height)
    if (width, height) != img.size:
        img = img.resize((width, height), Image.LANCZOS)

    if target is ImageFormat.JPEG and img.mode not in ("RGB", "L"):
        # JPEG has no alpha channel; flatten onto white
        background = Image.new("RGB", img.size, (255, 255, 255))
        rgba = img.convert("RGBA")
        background.paste(rgba, mask=rgba.split()[-1])
        img = background
    elif img.mode == "P":
        img = img.convert("RGBA")

    quality = max(1, min(100, int(round(options.quality * 100))))
    buf = BytesIO()
    try:
        if target is ImageFormat.PNG:
            img.save(buf, format=_PIL_FORMATS[target], optimize=True)
        else:
            img.save(buf, format=_PIL_FORMATS[target], quality=quality)
    except OSError as e:
        raise ImageConversionError(f"Failed to encode '{filename}' as {target.value}: {e}")

    out = buf.getvalue()
    compressed_size = len(out)
    ratio = round((1 - compressed_size / original_size) * 100) if original_size else 0
    stem = os.path.splitext(filename)[0] or "image"

    logger.debug(
        f"Converted {filename}: {format_file_size(original_size)} -> "
        f"{format_file_size(compressed_size)} ({ratio}%) as {target.value}"
    )

    return ConversionResult(
        data=out,
        filename=f"{stem}.{target.extension}",
        content_type=f"image/{target.value}",
        original_size=original_size,
        compressed_size=compressed_size,
        compression_ratio=ratio,
        format=target.value,
        width=width,
        height=height,
    )
