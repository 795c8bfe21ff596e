"""Tests for the scheduling engine."""

import random

import pytest

from taskplan.models.schedule import (
    CYCLE_MESSAGE,
    DanglingPolicy,
    ScheduleStatus,
    TaskDescriptor,
)
from taskplan.scheduling import schedule


def _random_dag(seed: int, size: int = 25) -> list[TaskDescriptor]:
    """Build an acyclic task set: tasks only depend on lower-numbered tasks."""
    rng = random.Random(seed)
    titles = [f"t{i:02d}" for i in range(size)]
    tasks = []
    for i, title in enumerate(titles):
        deps = rng.sample(titles[:i], k=rng.randint(0, min(i, 3)))
        if deps and rng.random() < 0.3:
            deps.append(deps[0])  # repeated entry
        if rng.random() < 0.2:
            deps.append(f"missing-{i}")
        tasks.append(
            TaskDescriptor(title=title, estimated_hours=rng.choice([0, 1, 1, 2, 3.5, 8]), dependencies=deps)
        )
    rng.shuffle(tasks)
    return tasks


def _assert_greedy(tasks: list[TaskDescriptor], order: list[str]) -> None:
    """Each emitted task must be the smallest (hours, title) among the ready ones."""
    titles = {t.title for t in tasks}
    by_title = {t.title: t for t in tasks}
    emitted: set[str] = set()
    for title in order:
        ready = [
            t
            for t in tasks
            if t.title not in emitted and all(d in emitted or d not in titles for d in t.dependencies)
        ]
        expected = min(ready, key=lambda t: (t.estimated_hours, t.title))
        assert title == expected.title
        assert by_title[title] in ready
        emitted.add(title)


class TestExampleScenarios:
    """The reference scenarios for the engine."""

    def test_lexical_tie_break_after_dependency(self, make_task) -> None:
        """B and C both unblock after A; equal durations fall back to title order."""
        result = schedule([make_task("A", 2), make_task("B", 1, ["A"]), make_task("C", 1, ["A"])])
        assert result.order == ["A", "B", "C"]
        assert result.has_cycle is False
        assert result.error_message is None

    def test_two_task_cycle(self, make_task) -> None:
        """Mutual dependencies cannot be scheduled."""
        result = schedule([make_task("A", 1, ["B"]), make_task("B", 1, ["A"])])
        assert result.has_cycle is True
        assert result.order == []
        assert result.error_message == CYCLE_MESSAGE

    def test_shorter_duration_first(self, make_task) -> None:
        """Independent tasks run shortest first."""
        result = schedule([make_task("X", 5), make_task("Y", 1)])
        assert result.order == ["Y", "X"]

    def test_dangling_dependency_ignored(self, make_task) -> None:
        """A dependency on an unknown task is treated as satisfied."""
        result = schedule([make_task("A", 1, ["Z"])])
        assert result.order == ["A"]
        assert result.ok

    def test_empty_input(self) -> None:
        """No tasks means an empty plan, not an error."""
        result = schedule([])
        assert result.order == []
        assert result.has_cycle is False
        assert result.status == ScheduleStatus.SCHEDULED


class TestOrdering:
    """Tie-break and dependency ordering."""

    def test_project_plan(self, sample_tasks_payload) -> None:
        """A realistic plan orders by dependencies, then duration."""
        tasks = [TaskDescriptor.model_validate(t) for t in sample_tasks_payload]
        result = schedule(tasks)
        assert result.order == ["Design", "Docs", "Build", "Test", "Deploy"]

    def test_frontier_prefers_short_root_over_long_root(self, make_task) -> None:
        """The shortest unblocked task wins even if a longer one unlocks more work."""
        result = schedule([make_task("A", 3), make_task("B", 1, ["A"]), make_task("C", 2)])
        assert result.order == ["C", "A", "B"]

    def test_released_task_competes_with_existing_frontier(self, make_task) -> None:
        """A newly unblocked short task overtakes a longer one already waiting."""
        result = schedule([make_task("A", 1), make_task("B", 1, ["A"]), make_task("C", 5)])
        assert result.order == ["A", "B", "C"]

    def test_title_tie_break_is_ordinal(self, make_task) -> None:
        """Uppercase sorts before lowercase."""
        result = schedule([make_task("b"), make_task("a"), make_task("B")])
        assert result.order == ["B", "a", "b"]

    def test_fractional_and_zero_durations(self, make_task) -> None:
        """Durations compare numerically, including zero and fractions."""
        result = schedule([make_task("slow", 1.5), make_task("quick", 0.25), make_task("free", 0)])
        assert result.order == ["free", "quick", "slow"]

    def test_due_date_does_not_affect_order(self, make_task) -> None:
        """Due dates are carried but never used for ordering."""
        result = schedule([make_task("B", due="2026-01-01"), make_task("A", due="2030-01-01")])
        assert result.order == ["A", "B"]

    def test_duplicate_dependency_entries_count_once(self, make_task) -> None:
        """Listing the same dependency twice must not block the task forever."""
        result = schedule([make_task("A"), make_task("B", deps=["A", "A", "A"])])
        assert result.ok
        assert result.order == ["A", "B"]

    def test_input_order_does_not_matter(self, make_task) -> None:
        """Shuffled input produces the same plan."""
        tasks = [
            make_task("A", 2),
            make_task("B", 1, ["A"]),
            make_task("C", 1, ["A"]),
            make_task("D", 3, ["B", "C"]),
            make_task("E", 1),
        ]
        expected = schedule(tasks).order
        assert schedule(list(reversed(tasks))).order == expected
        assert expected == ["E", "A", "B", "C", "D"]


class TestProperties:
    """Properties checked over generated acyclic task sets."""

    @pytest.mark.parametrize("seed", range(20))
    def test_complete_and_dependency_respecting(self, seed: int) -> None:
        """Every title appears once and after all its present dependencies."""
        tasks = _random_dag(seed)
        result = schedule(tasks)

        assert result.ok
        assert sorted(result.order) == sorted(t.title for t in tasks)
        position = {title: i for i, title in enumerate(result.order)}
        for task in tasks:
            for dep in task.dependencies:
                if dep in position:
                    assert position[dep] < position[task.title]

    @pytest.mark.parametrize("seed", range(20))
    def test_greedy_tie_break(self, seed: int) -> None:
        """Each step emits the shortest ready task, ties broken by title."""
        tasks = _random_dag(seed)
        _assert_greedy(tasks, schedule(tasks).order)

    @pytest.mark.parametrize("seed", range(10))
    def test_deterministic(self, seed: int) -> None:
        """Repeated and reshuffled calls agree."""
        tasks = _random_dag(seed)
        first = schedule(tasks).order
        random.Random(seed + 100).shuffle(tasks)
        assert schedule(tasks).order == first
        assert schedule(tasks).order == first

    @pytest.mark.parametrize("seed", range(10))
    def test_added_back_edge_is_a_cycle(self, seed: int) -> None:
        """Closing any dependency chain into a loop fails the whole plan."""
        tasks = _random_dag(seed)
        by_title = {t.title: t for t in tasks}
        # t00 <-> t24
        last = by_title["t24"]
        by_title["t24"] = last.model_copy(update={"dependencies": [*last.dependencies, "t00"]})
        first = by_title["t00"]
        by_title["t00"] = first.model_copy(update={"dependencies": ["t24"]})

        result = schedule(list(by_title.values()))

        assert result.has_cycle is True
        assert result.order == []
        assert "t00" in result.blocked
        assert "t24" in result.blocked


class TestCycles:
    """Cycle detection is all-or-nothing."""

    def test_self_dependency(self, make_task) -> None:
        """A task depending on itself is a cycle of one."""
        result = schedule([make_task("A", deps=["A"]), make_task("B")])
        assert result.has_cycle is True
        assert result.order == []
        assert result.blocked == ["A"]
        assert result.status == ScheduleStatus.CYCLE

    def test_no_partial_order_with_acyclic_tasks(self, make_task) -> None:
        """Acyclic tasks alongside a cycle are not returned."""
        tasks = [
            make_task("A"),
            make_task("B", deps=["C"]),
            make_task("C", deps=["B"]),
            make_task("D", deps=["B"]),
            make_task("E", deps=["A"]),
        ]
        result = schedule(tasks)
        assert result.has_cycle is True
        assert result.order == []
        assert result.blocked == ["B", "C", "D"]

    def test_long_cycle(self, make_task) -> None:
        """A cycle spanning many tasks is detected."""
        tasks = [make_task(f"n{i}", deps=[f"n{(i + 1) % 50}"]) for i in range(50)]
        result = schedule(tasks)
        assert result.has_cycle is True
        assert len(result.blocked) == 50

    def test_cycle_is_logged(self, make_task, captured_logs) -> None:
        """Cycle outcomes are logged as warnings."""
        schedule([make_task("A", deps=["B"]), make_task("B", deps=["A"])])
        events = [e for e in captured_logs if e["event"] == "schedule_cycle_detected"]
        assert events
        assert events[0]["log_level"] == "warning"
        assert events[0]["blocked"] == ["A", "B"]


class TestRejectedInput:
    """Duplicate titles, dangling policy and internal faults."""

    def test_duplicate_titles_rejected(self, make_task) -> None:
        """Duplicated titles are reported, not scheduled."""
        result = schedule([make_task("A"), make_task("B"), make_task("A", 3)])
        assert result.status == ScheduleStatus.INVALID
        assert result.has_cycle is False
        assert result.order == []
        assert result.error_message is not None
        assert "Duplicate task titles: A" in result.error_message

    def test_dangling_rejected_under_strict_policy(self, make_task) -> None:
        """The reject policy refuses unknown dependency titles."""
        result = schedule(
            [make_task("A", deps=["Z", "Y"]), make_task("B", deps=["A"])],
            dangling_policy=DanglingPolicy.REJECT,
        )
        assert result.status == ScheduleStatus.INVALID
        assert result.order == []
        assert result.error_message == "Unknown dependencies: A -> Z, Y"

    def test_strict_policy_allows_fully_resolved_input(self, make_task) -> None:
        """The reject policy has no effect when every dependency exists."""
        result = schedule(
            [make_task("A"), make_task("B", deps=["A"])],
            dangling_policy=DanglingPolicy.REJECT,
        )
        assert result.order == ["A", "B"]

    def test_malformed_element_becomes_failure(self, make_task) -> None:
        """Non-descriptor input is caught at the boundary."""
        result = schedule([make_task("A"), None])  # type: ignore[list-item]
        assert result.status == ScheduleStatus.FAILED
        assert result.has_cycle is False
        assert result.order == []
        assert result.error_message is not None
        assert result.error_message.startswith("Scheduling failed: ")

    def test_incomparable_durations_become_failure(self) -> None:
        """A fault inside the ordering loop is caught too."""
        tasks = [
            TaskDescriptor.model_construct(title="A", estimated_hours=None, due_date="", dependencies=[]),
            TaskDescriptor.model_construct(title="B", estimated_hours=1, due_date="", dependencies=[]),
        ]
        result = schedule(tasks)
        assert result.status == ScheduleStatus.FAILED
        assert not result.ok
