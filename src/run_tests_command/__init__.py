"""Run-tests command interpreter.

Turns a `/run-tests` slash command (or a manual workflow dispatch) into the
test-run parameters consumed by a CI workflow:
- configuration loaded from the runner environment / `.env`
- structured logging
- rejection comments posted back to the issue or pull request
"""

__version__ = "0.1.0"

from run_tests_command.interpreter.config import InterpreterSettings

__all__ = ["__version__", "InterpreterSettings"]
