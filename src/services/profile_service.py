"""Profile store: one profile per user."""

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import Conflict, NotFound
from src.models.profile import PROFILE_FIELDS, Profile
from src.models.user import User

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("first_name", "last_name", "bio", "skills", "interests")


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


class ProfileService:
    """Service for profile operations.

    Callers are trusted: ownership is established by the authentication
    dependency before any mutating method is reached.
    """

    def __init__(self, db: Session):
        self.db = db

    def _find(self, owner_id: str) -> Profile | None:
        return self.db.query(Profile).filter(Profile.user_id == owner_id).first()

    def get_by_owner(self, owner_id: str) -> Profile:
        profile = self._find(owner_id)
        if not profile:
            raise NotFound("No profile found for this user", title="Profile not found")
        return profile

    def get_by_username(self, username: str) -> Profile:
        user = self.db.query(User).filter(User.username == username).first()
        if not user:
            raise NotFound("No user found with this username", title="User not found")
        return self.get_by_owner(user.id)

    def create(self, owner_id: str, fields: dict[str, Any]) -> Profile:
        """Create the owner's profile. Empty strings are stored as NULL.

        Raises:
            Conflict: the owner already has a profile.
        """
        if self._find(owner_id):
            raise Conflict(
                "A profile already exists for this user. Use PUT to update.",
                title="Profile already exists",
            )

        values = {
            name: (None if _is_blank(fields.get(name)) else fields[name])
            for name in PROFILE_FIELDS
        }
        profile = Profile(user_id=owner_id, **values)
        self.db.add(profile)
        try:
            self.db.commit()
        except IntegrityError as e:
            # The unique constraint on user_id caught a concurrent create
            self.db.rollback()
            raise Conflict(
                "A profile already exists for this user. Use PUT to update.",
                title="Profile already exists",
            ) from e
        self.db.refresh(profile)

        logger.info(f"Created profile {profile.id} for user {owner_id}")
        return profile

    def update(self, owner_id: str, fields: dict[str, Any]) -> Profile:
        """Merge ``fields`` into the owner's profile.

        A field that is missing, None or "" keeps its stored value; anything
        else overwrites it.
        """
        profile = self.get_by_owner(owner_id)

        changed = []
        for name in PROFILE_FIELDS:
            value = fields.get(name)
            if _is_blank(value):
                continue
            setattr(profile, name, value)
            changed.append(name)

        if changed:
            self.db.commit()
            self.db.refresh(profile)
            logger.debug(f"Updated profile fields {changed} for user {owner_id}")
        return profile

    def set_picture(self, owner_id: str, picture_ref: str) -> Profile:
        profile = self.get_by_owner(owner_id)
        profile.profile_picture = picture_ref
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def clear_picture(self, owner_id: str, filename: str) -> None:
        """Drop the owner's picture reference if it points at ``filename``."""
        profile = self._find(owner_id)
        if profile and profile.profile_picture and profile.profile_picture.endswith(filename):
            profile.profile_picture = None
            self.db.commit()

    def delete(self, owner_id: str) -> None:
        profile = self.get_by_owner(owner_id)
        self.db.delete(profile)
        self.db.commit()
        logger.info(f"Deleted profile for user {owner_id}")

    def search(self, query: str, limit: int = 10, offset: int = 0) -> list[Profile]:
        """Case-insensitive substring search over names, bio, skills and interests."""
        conditions = [
            getattr(Profile, name).icontains(query, autoescape=True) for name in SEARCH_FIELDS
        ]
        return (
            self.db.query(Profile)
            .filter(or_(*conditions))
            .order_by(Profile.created_at, Profile.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
