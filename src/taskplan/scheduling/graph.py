"""Dependency graph construction for task scheduling."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from taskplan.errors import DanglingDependencyError, DuplicateTaskTitleError
from taskplan.models.schedule import DanglingPolicy, TaskDescriptor


@dataclass
class DependencyGraph:
    """Directed graph over task titles.

    An edge ``A -> B`` means ``B`` lists ``A`` as a dependency, so ``A`` must
    come first. Repeated dependency entries collapse into one edge, and
    references to titles outside the task set are kept aside in ``dangling``
    without contributing edges or in-degree.
    """

    nodes: dict[str, TaskDescriptor] = field(default_factory=dict)
    successors: dict[str, set[str]] = field(default_factory=dict)
    dependencies: dict[str, set[str]] = field(default_factory=dict)
    dangling: dict[str, list[str]] = field(default_factory=dict)

    @property
    def in_degree(self) -> dict[str, int]:
        return {title: len(deps) for title, deps in self.dependencies.items()}

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.successors.values())

    def edges(self) -> list[tuple[str, str]]:
        """All edges as ``(before, after)`` pairs, sorted."""
        return sorted(
            (source, target) for source, targets in self.successors.items() for target in targets
        )


def find_duplicate_titles(tasks: Sequence[TaskDescriptor]) -> list[str]:
    counts = Counter(task.title for task in tasks)
    return sorted(title for title, count in counts.items() if count > 1)


def build_dependency_graph(
    tasks: Sequence[TaskDescriptor],
    *,
    dangling_policy: DanglingPolicy = DanglingPolicy.IGNORE,
) -> DependencyGraph:
    """Build the dependency graph for a task set.

    Args:
        tasks: Task descriptors with pairwise distinct titles.
        dangling_policy: Whether unknown dependency titles are dropped or rejected.

    Returns:
        The populated DependencyGraph.

    Raises:
        DuplicateTaskTitleError: Two or more tasks share a title.
        DanglingDependencyError: A dependency names an unknown title and the
            policy is ``reject``.
    """
    duplicates = find_duplicate_titles(tasks)
    if duplicates:
        raise DuplicateTaskTitleError(duplicates)

    graph = DependencyGraph()
    for task in tasks:
        graph.nodes[task.title] = task
        graph.successors[task.title] = set()
        graph.dependencies[task.title] = set()

    for task in tasks:
        # dict.fromkeys dedupes while keeping the caller's order for reporting
        for dependency in dict.fromkeys(task.dependencies):
            if dependency in graph.nodes:
                graph.successors[dependency].add(task.title)
                graph.dependencies[task.title].add(dependency)
            else:
                graph.dangling.setdefault(task.title, []).append(dependency)

    if graph.dangling and dangling_policy == DanglingPolicy.REJECT:
        raise DanglingDependencyError(dict(graph.dangling))

    return graph
