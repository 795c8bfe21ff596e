"""Dependency diagnostics: cycle detection and dependency lookups."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from taskplan.errors import TaskNotFoundError
from taskplan.models.schedule import TaskDescriptor
from taskplan.scheduling.graph import DependencyGraph, build_dependency_graph

log = structlog.get_logger()


@dataclass
class CycleResult:
    """Result of cycle detection."""

    has_cycles: bool
    cycles: list[list[str]] = field(default_factory=list)
    message: str = ""


@dataclass
class DependencyResult:
    """Dependencies of a single task."""

    title: str
    dependencies: list[str] = field(default_factory=list)
    dangling: list[str] = field(default_factory=list)
    transitive: bool = False


def detect_dependency_cycles(tasks: Sequence[TaskDescriptor]) -> CycleResult:
    """Find every dependency cycle in a task set.

    Each cycle is reported as the sorted members of one strongly connected
    component. A task depending on itself is a cycle of one.

    Raises:
        DuplicateTaskTitleError: Two or more tasks share a title.
    """
    graph = build_dependency_graph(tasks)
    cycles = [
        component
        for component in _strongly_connected_components(graph)
        if len(component) > 1 or component[0] in graph.successors[component[0]]
    ]
    cycles.sort()

    if not cycles:
        return CycleResult(has_cycles=False, message="No dependency cycles found")

    log.info("dependency_cycles_found", count=len(cycles))
    return CycleResult(
        has_cycles=True,
        cycles=cycles,
        message=f"Found {len(cycles)} dependency cycle(s)",
    )


def get_task_dependencies(
    tasks: Sequence[TaskDescriptor],
    title: str,
    *,
    transitive: bool = False,
) -> DependencyResult:
    """Look up what a task depends on.

    Args:
        tasks: The task set.
        title: Task to inspect.
        transitive: Follow dependencies of dependencies as well.

    Returns:
        DependencyResult with resolved dependencies sorted by title. Dangling
        references are listed separately and only for the task itself. A task on
        a cycle never lists itself as a transitive dependency.

    Raises:
        TaskNotFoundError: ``title`` is not in the task set.
        DuplicateTaskTitleError: Two or more tasks share a title.
    """
    graph = build_dependency_graph(tasks)
    if title not in graph.nodes:
        raise TaskNotFoundError(title)

    found: set[str] = set()
    if not transitive:
        found.update(graph.dependencies[title])
    else:
        stack = list(graph.dependencies[title])
        while stack:
            current = stack.pop()
            if current in found:
                continue
            found.add(current)
            stack.extend(graph.dependencies[current] - found)
        found.discard(title)

    return DependencyResult(
        title=title,
        dependencies=sorted(found),
        dangling=list(graph.dangling.get(title, [])),
        transitive=transitive,
    )


def _strongly_connected_components(graph: DependencyGraph) -> list[list[str]]:
    # Kosaraju, iterative so deep chains don't hit the recursion limit
    finished: list[str] = []
    visited: set[str] = set()
    for root in sorted(graph.nodes):
        if root in visited:
            continue
        visited.add(root)
        stack = [(root, iter(sorted(graph.successors[root])))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if child not in visited:
                    visited.add(child)
                    stack.append((child, iter(sorted(graph.successors[child]))))
                    break
            else:
                stack.pop()
                finished.append(node)

    components: list[list[str]] = []
    assigned: set[str] = set()
    for root in reversed(finished):
        if root in assigned:
            continue
        assigned.add(root)
        component = []
        pending = [root]
        while pending:
            node = pending.pop()
            component.append(node)
            for parent in graph.dependencies[node]:
                if parent not in assigned:
                    assigned.add(parent)
                    pending.append(parent)
        components.append(sorted(component))

    return components
