"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.api import auth, profiles, uploads
from src.api.errors import register_exception_handlers
from src.config import Settings, get_settings
from src.context import ServiceContext

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicitly constructed service context."""
    settings = settings or get_settings()
    context = ServiceContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
        context.prepare_storage()
        if settings.auto_create_tables:
            context.init_db()
        logger.info(f"Profile API started ({settings.environment})")
        yield
        context.dispose()

    app = FastAPI(
        title="Profile API",
        description="Profiles, authentication and profile pictures for the mobile app",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.context = context

    if not settings.is_production:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(profiles.router)
    app.include_router(uploads.router)

    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get("/api")
    async def api_index():
        """List the API areas."""
        return {
            "message": "Profile API is running!",
            "version": app.version,
            "endpoints": {
                "auth": "/api/auth",
                "profile": "/api/profile",
                "upload": "/api/upload",
            },
        }

    return app


app = create_app()
