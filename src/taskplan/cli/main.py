"""Main CLI application.

This is the entry point for the taskplan CLI.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from taskplan.cli.common import (
    CORAL,
    ELECTRIC_PURPLE,
    console,
    create_table,
    error,
    format_hours,
    info,
    success,
    truncate,
    warn,
)
from taskplan.config import settings
from taskplan.errors import TaskplanError
from taskplan.loader import load_tasks
from taskplan.models.schedule import DanglingPolicy, ScheduleStatus, TaskDescriptor
from taskplan.scheduling import detect_dependency_cycles, get_task_dependencies, schedule

app = typer.Typer(
    name="taskplan",
    help="taskplan - dependency-aware task scheduling",
    add_completion=False,
    no_args_is_help=True,
)

TaskFile = Annotated[
    Path,
    typer.Argument(help="Task file (.json, .yaml or .yml)", exists=True, dir_okay=False),
]


def _load(path: Path) -> list[TaskDescriptor]:
    try:
        return load_tasks(path)
    except TaskplanError as e:
        error(e.message)
        raise typer.Exit(code=1) from e


@app.command("schedule")
def schedule_cmd(
    path: TaskFile,
    format_: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table, json")
    ] = "table",
    strict: Annotated[
        bool | None,
        typer.Option(
            "--strict/--lenient",
            help="Reject dependencies on unknown tasks (default from TASKPLAN_DANGLING_POLICY)",
        ),
    ] = None,
) -> None:
    """Print the recommended execution order for a task file.

    Examples:
        taskplan schedule tasks.json
        taskplan schedule tasks.yaml --strict
        taskplan schedule tasks.json -f json
    """
    tasks = _load(path)

    if strict is None:
        policy = settings.dangling_policy
    else:
        policy = DanglingPolicy.REJECT if strict else DanglingPolicy.IGNORE

    result = schedule(tasks, dangling_policy=policy)

    if format_ == "json":
        typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
        if not result.ok:
            raise typer.Exit(code=1)
        return

    if result.status == ScheduleStatus.CYCLE:
        error(result.error_message or "Circular dependency detected")
        console.print(f"[{CORAL}]Blocked:[/{CORAL}] {', '.join(result.blocked)}")
        raise typer.Exit(code=1)
    if not result.ok:
        error(result.error_message or "Scheduling failed")
        raise typer.Exit(code=1)

    if not result.order:
        info("No tasks to schedule")
        return

    by_title = {task.title: task for task in tasks}
    table = create_table("Schedule", "#", "Title", "Hours", "Start", "Finish", "Due")
    elapsed = 0.0
    for position, title in enumerate(result.order, start=1):
        task = by_title[title]
        start = elapsed
        elapsed += task.estimated_hours
        table.add_row(
            str(position),
            truncate(title, 40),
            format_hours(task.estimated_hours),
            format_hours(start),
            format_hours(elapsed),
            task.due_date or "-",
        )

    console.print(table)
    success(f"Scheduled {len(result.order)} task(s), {format_hours(elapsed)}h total")


@app.command("cycles")
def cycles_cmd(path: TaskFile) -> None:
    """Report dependency cycles in a task file."""
    tasks = _load(path)

    try:
        result = detect_dependency_cycles(tasks)
    except TaskplanError as e:
        error(e.message)
        raise typer.Exit(code=1) from e

    if not result.has_cycles:
        success(result.message)
        return

    warn(result.message)
    for members in result.cycles:
        console.print(f"  [{ELECTRIC_PURPLE}]↻[/{ELECTRIC_PURPLE}] {', '.join(members)}")
    raise typer.Exit(code=1)


@app.command("deps")
def deps_cmd(
    path: TaskFile,
    title: Annotated[str, typer.Argument(help="Task title to inspect")],
    transitive: Annotated[
        bool, typer.Option("--transitive", "-t", help="Include indirect dependencies")
    ] = False,
) -> None:
    """List what a task depends on."""
    tasks = _load(path)

    try:
        result = get_task_dependencies(tasks, title, transitive=transitive)
    except TaskplanError as e:
        error(e.message)
        raise typer.Exit(code=1) from e

    if not result.dependencies:
        info(f"{title} has no dependencies")
    else:
        for dependency in result.dependencies:
            console.print(f"  {dependency}")
    if result.dangling:
        warn(f"Unknown dependencies ignored: {', '.join(result.dangling)}")


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", "-h", help="Host to bind to")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port to listen on")] = None,
) -> None:
    """Start the scheduling API server.

    Examples:
        taskplan serve                 # Defaults from TASKPLAN_SERVER_HOST/PORT
        taskplan serve -p 9000
    """
    from taskplan.main import run_server

    run_server(host=host, port=port)


def main() -> None:
    """Console script entry point."""
    from taskplan.main import configure_logging

    configure_logging()
    app()
