from typing import Optional

from pydantic import BaseModel


class MediaUploadResult(BaseModel):
    success: bool
    url: Optional[str] = None
    path: Optional[str] = None
    error: Optional[str] = None
