"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.context import ServiceContext
from src.database import get_db
from src.errors import Unauthorized
from src.models.user import User
from src.services.auth import get_user_by_id
from src.services.picture_service import PictureService
from src.services.profile_service import ProfileService
from src.services.tokens import ExpiredTokenError, InvalidTokenError, TokenService

# Missing credentials are reported by get_current_user, not by HTTPBearer
security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> ServiceContext:
    """Get the service context built at startup."""
    return request.app.state.context


def get_token_service(
    context: Annotated[ServiceContext, Depends(get_context)],
) -> TokenService:
    return context.tokens


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token.

    The resolved user is also stored on ``request.state.user``.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized(
            "Please provide an authentication token", title="No token provided"
        )

    try:
        claims = tokens.verify(credentials.credentials)
    except ExpiredTokenError as e:
        raise Unauthorized("Authentication token has expired", title="Invalid token") from e
    except InvalidTokenError as e:
        raise Unauthorized("Invalid authentication token", title="Invalid token") from e

    user = get_user_by_id(db, claims.user_id)
    if user is None:
        raise Unauthorized("User not found", title="Invalid token")

    request.state.user = user
    return user


def get_profile_service(
    db: Annotated[Session, Depends(get_db)],
) -> ProfileService:
    """Get profile service with dependencies."""
    return ProfileService(db)


def get_picture_service(
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[ServiceContext, Depends(get_context)],
) -> PictureService:
    """Get picture service with dependencies."""
    return PictureService(db, context.settings)
