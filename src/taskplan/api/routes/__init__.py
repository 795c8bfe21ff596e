"""API route modules."""

from taskplan.api.routes.schedule import router as schedule_router

__all__ = ["schedule_router"]
