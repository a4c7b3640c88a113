"""Profile picture processing and storage."""

import io
import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from PIL import Image, ImageOps, UnidentifiedImageError
from sqlalchemy.orm import Session

from src.config import Settings
from src.errors import BadInput, Forbidden, NotFound
from src.models.profile_picture import ProfilePicture
from src.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

OUTPUT_CONTENT_TYPE = "image/jpeg"


class PictureService:
    """Validate, square-crop, re-encode and store uploaded profile pictures.

    Every stored file gets a ``ProfilePicture`` row naming its owner; deletes
    are checked against that row as well as the owner id embedded in the
    filename.
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.upload_dir = Path(settings.upload_dir)
        self.max_bytes = settings.max_upload_bytes
        self.size = settings.picture_size
        self.quality = settings.picture_quality

    def _path_for(self, filename: str) -> Path:
        if not filename or Path(filename).name != filename or filename.startswith("."):
            raise BadInput("Invalid filename", title="Invalid filename")
        return self.upload_dir / filename

    def _render(self, data: bytes) -> bytes:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                image = ImageOps.exif_transpose(image)
                thumbnail = ImageOps.fit(
                    image.convert("RGB"),
                    (self.size, self.size),
                    method=Image.Resampling.LANCZOS,
                    centering=(0.5, 0.5),
                )
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise BadInput(
                "The uploaded file is not a readable image", title="Invalid image"
            ) from e

        output = io.BytesIO()
        thumbnail.save(output, format="JPEG", quality=self.quality, optimize=True)
        return output.getvalue()

    def process(self, owner_id: str, data: bytes, content_type: str | None) -> ProfilePicture:
        """Store ``data`` as the owner's picture and return its ownership record.

        Raises:
            BadInput: wrong MIME type, empty or oversized payload, or undecodable image.
        """
        if not content_type or not content_type.startswith("image/"):
            raise BadInput("Only image files are allowed", title="Invalid file type")
        if not data:
            raise BadInput("Please upload an image file", title="No file uploaded")
        if len(data) > self.max_bytes:
            raise BadInput(
                f"File too large. Maximum size is {self.max_bytes} bytes.",
                title="File too large",
            )

        rendered = self._render(data)

        filename = f"profile_{owner_id}_{uuid.uuid4().hex}.jpg"
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / filename
        path.write_bytes(rendered)

        picture = ProfilePicture(
            owner_id=owner_id,
            filename=filename,
            content_type=OUTPUT_CONTENT_TYPE,
            size_bytes=len(rendered),
        )
        self.db.add(picture)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            path.unlink(missing_ok=True)
            raise
        self.db.refresh(picture)

        logger.info(f"Stored profile picture {filename} for user {owner_id}")
        return picture

    def delete(self, owner_id: str, filename: str) -> None:
        """Delete one of the owner's pictures.

        Raises:
            NotFound: no such file and no record of it.
            Forbidden: the picture belongs to someone else.
        """
        path = self._path_for(filename)
        record = (
            self.db.query(ProfilePicture).filter(ProfilePicture.filename == filename).first()
        )
        if record is None and not path.exists():
            raise NotFound("The specified file does not exist", title="File not found")

        if owner_id not in filename or record is None or record.owner_id != owner_id:
            logger.warning(f"User {owner_id} was refused deletion of {filename}")
            raise Forbidden("You can only delete your own files")

        self.db.delete(record)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        path.unlink(missing_ok=True)
        ProfileService(self.db).clear_picture(owner_id, filename)

        logger.info(f"Deleted profile picture {filename} for user {owner_id}")

    def describe(self, filename: str) -> dict[str, Any]:
        path = self._path_for(filename)
        if not path.is_file():
            raise NotFound("The specified file does not exist", title="File not found")

        stats = path.stat()
        return {
            "filename": filename,
            "size": stats.st_size,
            "created": datetime.fromtimestamp(stats.st_ctime, tz=UTC),
            "modified": datetime.fromtimestamp(stats.st_mtime, tz=UTC),
        }
