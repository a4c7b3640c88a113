"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_token_service
from src.database import get_db
from src.errors import Unauthorized
from src.models.user import User
from src.schemas.auth import AuthResponse, MeResponse, UserLogin, UserRegister, UserResponse
from src.schemas.common import MessageResponse
from src.services.auth import authenticate_user, create_user
from src.services.tokens import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Register a new user."""
    user = create_user(db, user_data.username, user_data.email, user_data.password)

    return AuthResponse(
        message="User registered successfully",
        token=tokens.issue(user.id, user.username),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with username (or email) and password."""
    user = authenticate_user(db, credentials.username, credentials.password)

    if not user:
        logger.info(f"Failed login for '{credentials.username}'")
        raise Unauthorized(
            "Username/email or password is incorrect", title="Invalid credentials"
        )

    return AuthResponse(
        message="Login successful",
        token=tokens.issue(user.id, user.username),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return MeResponse(user=UserResponse.model_validate(current_user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout (client should discard token)."""
    return MessageResponse(message="Logged out successfully")
