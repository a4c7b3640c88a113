"""Profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_profile_service
from src.models.user import User
from src.schemas.common import MessageResponse
from src.schemas.profile import (
    ProfileCreate,
    ProfileEnvelope,
    ProfilePictureUpdate,
    ProfileResponse,
    ProfileSearchResponse,
    ProfileUpdate,
)
from src.services.profile_service import ProfileService

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.post("", response_model=ProfileEnvelope, status_code=status.HTTP_201_CREATED)
def create_profile(
    profile_data: ProfileCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Create the current user's profile."""
    profile = profiles.create(current_user.id, profile_data.model_dump())
    return ProfileEnvelope(
        message="Profile created successfully", profile=ProfileResponse.model_validate(profile)
    )


@router.get("/me", response_model=ProfileEnvelope)
def get_my_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Get the current user's profile."""
    profile = profiles.get_by_owner(current_user.id)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(profile))


@router.put("/me", response_model=ProfileEnvelope)
def update_my_profile(
    profile_data: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Update the current user's profile; fields left out or blank are kept."""
    profile = profiles.update(current_user.id, profile_data.model_dump(exclude_unset=True))
    return ProfileEnvelope(
        message="Profile updated successfully", profile=ProfileResponse.model_validate(profile)
    )


@router.patch("/me/picture", response_model=ProfileEnvelope)
def update_my_picture(
    picture: ProfilePictureUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Point the current user's profile at an uploaded picture."""
    profile = profiles.set_picture(current_user.id, picture.profile_picture)
    return ProfileEnvelope(
        message="Profile picture updated successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.delete("/me", response_model=MessageResponse)
def delete_my_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Delete the current user's profile."""
    profiles.delete(current_user.id)
    return MessageResponse(message="Profile deleted successfully")


@router.get("/search", response_model=ProfileSearchResponse)
def search_profiles(
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
    q: Annotated[str, Query(min_length=1, max_length=100)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """Search profiles by name, bio, skills or interests."""
    results = profiles.search(q, limit=limit, offset=offset)
    return ProfileSearchResponse(
        profiles=[ProfileResponse.model_validate(p) for p in results],
        count=len(results),
        query=q,
    )


@router.get("/username/{username}", response_model=ProfileEnvelope)
def get_profile_by_username(
    username: str,
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Get a user's public profile by username."""
    profile = profiles.get_by_username(username)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(profile))


@router.get("/user/{user_id}", response_model=ProfileEnvelope)
def get_profile_by_user_id(
    user_id: str,
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Get a user's public profile by user id."""
    profile = profiles.get_by_owner(user_id)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(profile))
