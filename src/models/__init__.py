"""SQLAlchemy models."""

from src.models.profile import Profile
from src.models.profile_picture import ProfilePicture
from src.models.user import User

__all__ = [
    "User",
    "Profile",
    "ProfilePicture",
]
