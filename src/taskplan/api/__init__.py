"""HTTP API for the scheduler."""

from taskplan.api.app import create_app

__all__ = ["create_app"]
