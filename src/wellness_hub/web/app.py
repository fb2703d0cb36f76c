"""FastAPI application for the wellness-hub web interface."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..config import Settings, get_settings
from ..db.engine import get_db_path, init_db
from ..errors import Unauthenticated
from ..generation.provider import PlanProvider, create_provider
from ..logging_setup import setup_logging
from .notices import redirect_with_notice
from .routers import auth, calendar, dashboard, nutrition, profile, workouts

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    db_path = app.state.db_path
    if not db_path.exists():
        await init_db(db_path)
    yield


def create_app(
    settings: Settings | None = None,
    provider: PlanProvider | None = None,
    db_path: Path | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The provider is built once here and shared by every request; pass one in
    to substitute a fake client.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="wellness-hub",
        description="AI-generated workout and meal plans",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db_path = db_path or get_db_path(settings.data_dir)
    app.state.provider = provider or create_provider(settings)
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(workouts.router)
    app.include_router(nutrition.router)
    app.include_router(calendar.router)
    app.include_router(profile.router)

    @app.exception_handler(Unauthenticated)
    async def unauthenticated_handler(request: Request, exc: Unauthenticated):
        """Send signed-out visitors to the sign-in page."""
        logger.info("Unauthenticated access to %s", request.url.path)
        target = "/auth?" + urlencode({"next": request.url.path})
        return redirect_with_notice(target, str(exc), level="error", title=exc.title)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "demo_mode": not app.state.provider.available,
        }

    return app
