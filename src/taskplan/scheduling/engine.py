"""Deterministic dependency-respecting task scheduler.

Kahn's algorithm over the dependency graph with a min-heap frontier keyed on
``(estimated_hours, title)``: among tasks that are unblocked at the same time,
the shortest runs first and equal durations fall back to lexical title order,
so a given input always yields the same plan.
"""

import heapq
from collections.abc import Sequence

import structlog

from taskplan.errors import ValidationError
from taskplan.models.schedule import DanglingPolicy, ScheduleResult, TaskDescriptor
from taskplan.scheduling.graph import DependencyGraph, build_dependency_graph

log = structlog.get_logger()


def schedule(
    tasks: Sequence[TaskDescriptor],
    *,
    dangling_policy: DanglingPolicy = DanglingPolicy.IGNORE,
) -> ScheduleResult:
    """Compute an execution order for a task set.

    Never raises: cycles, rejected input and unexpected faults are all
    reported through the returned result.

    Args:
        tasks: Task descriptors for one request. Titles must be unique.
        dangling_policy: Handling of dependencies on titles not in ``tasks``.

    Returns:
        ScheduleResult with the order on success, or the failure outcome.
    """
    try:
        graph = build_dependency_graph(tasks, dangling_policy=dangling_policy)
        order = topological_order(graph)
    except ValidationError as e:
        log.warning("schedule_rejected", error=e.message, **e.details)
        return ScheduleResult.invalid(e.message)
    except Exception as e:
        log.exception("schedule_failed", error_type=type(e).__name__, error=str(e))
        return ScheduleResult.failed(str(e))

    if len(order) != len(graph.nodes):
        emitted = set(order)
        blocked = sorted(title for title in graph.nodes if title not in emitted)
        log.warning("schedule_cycle_detected", task_count=len(graph.nodes), blocked=blocked)
        return ScheduleResult.cycle(blocked)

    log.debug(
        "schedule_complete",
        task_count=len(order),
        edge_count=graph.edge_count,
        dangling=len(graph.dangling),
    )
    return ScheduleResult.scheduled(order)


def topological_order(graph: DependencyGraph) -> list[str]:
    """Run Kahn's algorithm and return the titles it could release.

    The result is shorter than the node count exactly when the graph has a
    cycle; nodes on or behind a cycle never reach in-degree zero.
    """
    remaining = graph.in_degree
    frontier = [
        (graph.nodes[title].estimated_hours, title)
        for title, degree in remaining.items()
        if degree == 0
    ]
    heapq.heapify(frontier)

    order: list[str] = []
    while frontier:
        _, title = heapq.heappop(frontier)
        order.append(title)
        for successor in graph.successors[title]:
            remaining[successor] -= 1
            if remaining[successor] == 0:
                heapq.heappush(frontier, (graph.nodes[successor].estimated_hours, successor))

    return order
