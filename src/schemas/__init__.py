"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, MeResponse, UserLogin, UserRegister, UserResponse
from src.schemas.common import MessageResponse
from src.schemas.profile import (
    ProfileCreate,
    ProfileEnvelope,
    ProfilePictureUpdate,
    ProfileResponse,
    ProfileSearchResponse,
    ProfileUpdate,
)
from src.schemas.upload import PictureInfoResponse, PictureUploadResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MeResponse",
    "MessageResponse",
    "ProfileCreate",
    "ProfileUpdate",
    "ProfilePictureUpdate",
    "ProfileResponse",
    "ProfileEnvelope",
    "ProfileSearchResponse",
    "PictureUploadResponse",
    "PictureInfoResponse",
]
