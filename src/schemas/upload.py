"""Upload schemas."""

from datetime import datetime

from src.schemas.common import CamelModel


class PictureUploadResponse(CamelModel):
    """Stored picture location."""

    message: str
    image_url: str
    filename: str


class PictureInfoResponse(CamelModel):
    """Stored picture file details."""

    filename: str
    size: int
    created: datetime
    modified: datetime
