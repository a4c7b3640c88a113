"""Profile model."""

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import backref, relationship

from src.database import Base
from src.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

# Editable free-text fields, in wire order
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "bio",
    "location",
    "interests",
    "skills",
    "experience",
    "education",
    "social",
    "projects",
)


class Profile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Public profile; at most one per user."""

    __tablename__ = "profiles"

    # unique=True is what makes concurrent creates for one user safe
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    bio = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    interests = Column(Text, nullable=True)
    skills = Column(Text, nullable=True)
    experience = Column(Text, nullable=True)
    education = Column(Text, nullable=True)
    social = Column("social_links", Text, nullable=True)
    projects = Column(Text, nullable=True)
    profile_picture = Column(String(512), nullable=True)

    # Relationships
    user = relationship("User", backref=backref("profile", uselist=False), lazy="joined")

    @property
    def username(self) -> str | None:
        return self.user.username if self.user else None
