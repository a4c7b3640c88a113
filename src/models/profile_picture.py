"""Uploaded profile picture model."""

from sqlalchemy import Column, ForeignKey, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class ProfilePicture(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Ownership record for a stored picture file."""

    __tablename__ = "profile_pictures"

    owner_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filename = Column(String(255), unique=True, nullable=False)
    content_type = Column(String(100), nullable=False)
    size_bytes = Column(Integer, nullable=False)
