"""Profile schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from src.schemas.common import CamelModel


class ProfileFields(CamelModel):
    """Editable profile fields; every one is optional."""

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    bio: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=100)
    interests: str | None = Field(None, max_length=500)
    skills: str | None = Field(None, max_length=500)
    experience: str | None = Field(None, max_length=1000)
    education: str | None = Field(None, max_length=500)
    social: str | None = Field(None, max_length=500)
    projects: str | None = Field(None, max_length=1000)


class ProfileCreate(ProfileFields):
    """Create the caller's profile."""


class ProfileUpdate(ProfileFields):
    """Partial profile update; omitted, null and empty fields keep their value."""


class ProfilePictureUpdate(CamelModel):
    """Point the profile at an uploaded picture."""

    profile_picture: str = Field(..., min_length=1, max_length=512)


class ProfileResponse(CamelModel):
    """Profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    username: str | None = None
    first_name: str | None
    last_name: str | None
    bio: str | None
    location: str | None
    interests: str | None
    skills: str | None
    experience: str | None
    education: str | None
    social: str | None
    projects: str | None
    profile_picture: str | None
    created_at: datetime
    updated_at: datetime


class ProfileEnvelope(CamelModel):
    """Single profile, optionally with a status message."""

    message: str | None = None
    profile: ProfileResponse


class ProfileSearchResponse(CamelModel):
    """Search results page."""

    profiles: list[ProfileResponse]
    count: int
    query: str
