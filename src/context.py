"""Process-wide services, built once and injected into the app."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from src.config import Settings
from src.database import (
    create_db_engine,
    create_session_factory,
    ensure_database_dir,
    init_db,
)
from src.services.tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    """Settings, storage and token signing shared by every request.

    Lives from application startup to shutdown. Requests borrow a session
    from ``session_factory`` and return it when they finish.
    """

    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    tokens: TokenService

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContext":
        engine = create_db_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=create_session_factory(engine),
            tokens=TokenService(
                settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                expiration_minutes=settings.jwt_expiration_minutes,
            ),
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Scoped session for work outside a request (scripts, tests)."""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def prepare_storage(self) -> None:
        """Create on-disk locations the database needs before first connect."""
        ensure_database_dir(self.settings)

    def init_db(self) -> None:
        self.prepare_storage()
        init_db(self.engine)
        logger.info("Database tables ready")

    def dispose(self) -> None:
        self.engine.dispose()
