from __future__ import annotations

from enum import Enum

from .command import Rejected, RejectionReason, is_run_tests_command, parse_command
from .events import EventKind, TriggerEvent
from .parameters import RunParameters


class NonCommandPolicy(str, Enum):
    """What a comment that is not a ``/run-tests`` command produces."""

    DEFAULTS = "defaults"
    SKIP = "skip"


def interpret(
    event: TriggerEvent, *, non_command_policy: NonCommandPolicy
) -> RunParameters | Rejected:
    """Policy: event -> run parameters or a rejection.

    This is pure. Reporting a rejection is the caller's job.
    """

    if event.kind is EventKind.MANUAL:
        return RunParameters.defaults()

    if event.kind is EventKind.COMMENT:
        body = event.comment_body or ""
        if not is_run_tests_command(body):
            if non_command_policy is NonCommandPolicy.SKIP:
                return RunParameters.skipped()
            return RunParameters.defaults()
        return parse_command(body)

    return Rejected(
        reason=RejectionReason.UNSUPPORTED_EVENT,
        message=f"Unsupported trigger event `{event.name}`; no test parameters were produced.",
        field="event",
        value=event.name,
    )
