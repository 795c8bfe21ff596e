"""Load task descriptors from JSON or YAML files."""

import json
from pathlib import Path
from typing import Any

import pydantic
import structlog
import yaml

from taskplan.errors import TaskFileError
from taskplan.models.schedule import TaskDescriptor

log = structlog.get_logger()

_TASK_LIST = pydantic.TypeAdapter(list[TaskDescriptor])
YAML_SUFFIXES = {".yaml", ".yml"}


def parse_tasks(data: Any) -> list[TaskDescriptor]:
    """Validate already-decoded data into task descriptors.

    Accepts either a bare list of tasks or a mapping with a ``tasks`` key.
    """
    if isinstance(data, dict):
        if "tasks" not in data:
            raise TaskFileError("Task document must contain a 'tasks' list")
        data = data["tasks"]
    if data is None:
        return []
    try:
        return _TASK_LIST.validate_python(data)
    except pydantic.ValidationError as e:
        raise TaskFileError(
            f"Invalid task data: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e


def load_tasks(path: Path) -> list[TaskDescriptor]:
    """Read a task file; the suffix selects YAML, anything else is JSON."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TaskFileError(f"Could not read {path}: {e}", details={"path": str(path)}) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise TaskFileError(f"Could not parse {path.name}: {e}", details={"path": str(path)}) from e

    tasks = parse_tasks(data)
    log.debug("tasks_loaded", path=str(path), count=len(tasks))
    return tasks
