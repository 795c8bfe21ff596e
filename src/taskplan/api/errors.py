"""Secure error handling for API responses.

Clients get generic messages; full details go to the log together with a
short reference id they can quote back.
"""

import uuid
from typing import NoReturn

import structlog
from fastapi import HTTPException

from taskplan.models.schedule import ScheduleResult

log = structlog.get_logger()

INTERNAL_ERROR = "An internal error occurred. Please try again later."
VALIDATION_ERROR = "Invalid request data."


def generate_error_id() -> str:
    return str(uuid.uuid4())[:8]


def raise_scheduling_failure(
    result: ScheduleResult,
    *,
    project_id: str,
    task_count: int,
) -> NoReturn:
    """Turn a failed schedule into a 500 that hides the failure reason.

    The reason from the engine goes to the log under a short reference id;
    the client only sees the generic message and that id.

    Raises:
        HTTPException: 500 with generic message
    """
    error_id = generate_error_id()

    log.error(
        "schedule_internal_error",
        error_id=error_id,
        project_id=project_id,
        task_count=task_count,
        status=result.status.value,
        reason=result.error_message,
    )

    raise HTTPException(
        status_code=500,
        detail=f"{INTERNAL_ERROR} (ref: {error_id})",
    )


def raise_validation_error(
    message: str | None = None,
    *,
    exc: Exception | None = None,
    context: str | None = None,
) -> NoReturn:
    """Raise a 400 error with a safe validation message.

    Args:
        message: Safe user-facing message (or uses default)
        exc: Optional original exception (for logging only)
        context: Human-readable context for logs

    Raises:
        HTTPException: 400 with validation message
    """
    log.warning(
        "validation_error",
        context=context,
        error_type=type(exc).__name__ if exc else None,
        error_message=str(exc) if exc else message,
    )

    raise HTTPException(
        status_code=400,
        detail=message or VALIDATION_ERROR,
    ) from exc
