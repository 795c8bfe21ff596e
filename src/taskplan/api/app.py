"""FastAPI application factory."""

from typing import Any

from fastapi import FastAPI

from taskplan import __version__
from taskplan.api.routes import schedule_router
from taskplan.config import Settings, get_settings


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create the API application.

    Args:
        app_settings: Settings to serve with. Defaults to the environment-loaded
            settings; when given, they replace ``get_settings`` for every route.
    """
    resolved = app_settings or get_settings()

    app = FastAPI(
        title="taskplan",
        version=__version__,
        description="Dependency-aware task scheduling",
    )
    app.include_router(schedule_router, prefix=resolved.api_prefix)

    if app_settings is not None:
        app.dependency_overrides[get_settings] = lambda: app_settings

    @app.get("/health", tags=["health"])
    def health() -> dict[str, Any]:
        return {"status": "healthy", "version": __version__}

    return app
