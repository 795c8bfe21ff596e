"""taskplan - dependency-aware task scheduling.

Orders a project's tasks so every dependency runs first, picking the
shortest unblocked task at each step.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
