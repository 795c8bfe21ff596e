"""Dependency-aware task scheduling."""

from taskplan.scheduling.dependencies import (
    CycleResult,
    DependencyResult,
    detect_dependency_cycles,
    get_task_dependencies,
)
from taskplan.scheduling.engine import schedule, topological_order
from taskplan.scheduling.graph import DependencyGraph, build_dependency_graph

__all__ = [
    # Engine
    "schedule",
    "topological_order",
    # Graph
    "DependencyGraph",
    "build_dependency_graph",
    # Diagnostics
    "detect_dependency_cycles",
    "get_task_dependencies",
    "CycleResult",
    "DependencyResult",
]
