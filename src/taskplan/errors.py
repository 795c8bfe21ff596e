"""Custom exceptions for the taskplan scheduler."""


class TaskplanError(Exception):
    """Base exception for all taskplan errors."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TaskplanError):
    """Raised when task input fails validation."""


class DuplicateTaskTitleError(ValidationError):
    """Raised when two tasks in one request share a title."""

    def __init__(self, titles: list[str]) -> None:
        super().__init__(
            f"Duplicate task titles: {', '.join(titles)}",
            details={"titles": titles},
        )
        self.titles = titles


class DanglingDependencyError(ValidationError):
    """Raised when a task depends on a title that is not in the task set."""

    def __init__(self, missing: dict[str, list[str]]) -> None:
        described = "; ".join(f"{title} -> {', '.join(deps)}" for title, deps in missing.items())
        super().__init__(
            f"Unknown dependencies: {described}",
            details={"missing": missing},
        )
        self.missing = missing


class TaskFileError(ValidationError):
    """Raised when a task file cannot be read or parsed."""


class TaskNotFoundError(TaskplanError):
    """Raised when a requested task title is not in the task set."""

    def __init__(self, title: str) -> None:
        super().__init__(f"Task not found: {title}", details={"title": title})
        self.title = title

