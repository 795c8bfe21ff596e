"""taskplan CLI.

Commands:
- schedule: Print the recommended execution order
- cycles: Report dependency cycles
- deps: List a task's dependencies
- serve: Run the HTTP API
"""

from taskplan.cli.main import app, main

__all__ = ["app", "main"]
