"""Console entrypoint; the CLI is implemented in `run_tests_command.interpreter.main`."""

from __future__ import annotations

from run_tests_command.interpreter.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
