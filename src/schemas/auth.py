"""Authentication schemas."""

import re
from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field, field_validator

from src.schemas.common import CamelModel

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9]+")
PASSWORD_SYMBOLS = "@$!%*?&"


def password_problems(password: str) -> list[str]:
    """Return the password policy rules that ``password`` breaks."""
    problems = []
    if len(password) < 8:
        problems.append("at least 8 characters")
    if not any(c.islower() for c in password):
        problems.append("one lowercase letter")
    if not any(c.isupper() for c in password):
        problems.append("one uppercase letter")
    if not any(c.isdigit() for c in password):
        problems.append("one number")
    if not any(c in PASSWORD_SYMBOLS for c in password):
        problems.append(f"one special character ({PASSWORD_SYMBOLS})")
    return problems


class UserRegister(CamelModel):
    """User registration request."""

    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)

    @field_validator("username")
    @classmethod
    def username_is_alphanumeric(cls, value: str) -> str:
        if not USERNAME_PATTERN.fullmatch(value):
            raise ValueError("Username must contain only alphanumeric characters")
        return value

    @field_validator("password")
    @classmethod
    def password_meets_policy(cls, value: str) -> str:
        problems = password_problems(value)
        if problems:
            raise ValueError("Password must contain " + ", ".join(problems))
        return value


class UserLogin(CamelModel):
    """User login request. ``username`` may also be an email address."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    message: str
    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class MeResponse(CamelModel):
    """Current user wrapper."""

    user: UserResponse
