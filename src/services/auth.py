"""Credential store: user records and password handling."""

import logging

from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import Conflict
from src.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_id(db: Session, user_id: str) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_username_or_email(db: Session, identifier: str) -> User | None:
    """Get a user whose username or email equals ``identifier``."""
    return (
        db.query(User)
        .filter(or_(User.username == identifier, User.email == identifier))
        .first()
    )


def authenticate_user(db: Session, identifier: str, password: str) -> User | None:
    """Authenticate a user by username or email and password."""
    user = get_user_by_username_or_email(db, identifier)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def find_registered_user(db: Session, username: str, email: str) -> User | None:
    """Get a user already holding this username or this email."""
    return db.query(User).filter(or_(User.username == username, User.email == email)).first()


def create_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new user.

    Raises:
        Conflict: the username or email is already registered.
    """
    if find_registered_user(db, username, email):
        raise Conflict(
            "A user with this username or email already exists", title="User already exists"
        )

    user = User(username=username, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        db.rollback()
        raise Conflict(
            "A user with this username or email already exists", title="User already exists"
        ) from e
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user
