#!/usr/bin/env python3
"""Programmatic interpretation example.

This demonstrates using the interpreter components directly:

* build a trigger event from an issue comment
* interpret it with a dry-run comment poster (nothing is sent to GitHub)
* print the resulting step outputs

The comment text is passed as an argument.
"""

from __future__ import annotations

import argparse
import json
from typing import Sequence

from run_tests_command.interpreter.config import InterpreterSettings
from run_tests_command.interpreter.events import TriggerEvent
from run_tests_command.interpreter.logging import configure_logging
from run_tests_command.interpreter.service import (
    CommandInterpreter,
    CommandRejectedError,
    LoggingCommentPoster,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interpret a /run-tests comment (dry run).")
    parser.add_argument("comment", help='Comment body, e.g. "/run-tests UAT Websters SMOKE ..."')
    parser.add_argument("--issue-number", type=int, default=1, help="Issue number (default: 1)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = InterpreterSettings()
    configure_logging(settings.log_level, settings.log_format)

    event = TriggerEvent.from_github(
        "issue_comment",
        {"comment": {"body": args.comment}, "issue": {"number": args.issue_number}},
    )
    interpreter = CommandInterpreter(
        LoggingCommentPoster(),
        non_command_policy=settings.non_command_policy,
        rejection_policy=settings.rejection_policy,
    )

    try:
        params = interpreter.handle(event)
    except CommandRejectedError as exc:
        print(f"Rejected: {exc}")
        return 1

    print(json.dumps(params.to_outputs(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
