"""Command interpreter service: the pure policy plus its reporting side effects.

Responsibilities:
- decide run parameters for a trigger event (delegated to `policy.interpret`)
- report rejections to the CI log and as a comment on the issue / pull request
- turn a rejection into a failure or a skip, depending on configuration
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .command import Rejected
from .events import TriggerEvent
from .parameters import RunParameters
from .policy import NonCommandPolicy, interpret

logger = logging.getLogger(__name__)


class RejectionPolicy(str, Enum):
    """How a rejected command is signalled to the calling workflow."""

    FAIL = "fail"
    SKIP = "skip"


class CommentPoster(Protocol):
    """Posts a comment on an issue or pull request. Raises on failure."""

    def post_comment(self, *, issue_number: int, body: str) -> None: ...


@dataclass(frozen=True, eq=False)
class CommandRejectedError(RuntimeError):
    """Raised when a rejection is configured to fail the workflow job."""

    rejection: Rejected

    def __str__(self) -> str:
        return self.rejection.summary


class LoggingCommentPoster:
    """Dry-run poster: logs the comment instead of calling GitHub."""

    def post_comment(self, *, issue_number: int, body: str) -> None:
        logger.info(
            "Dry run: comment not posted",
            extra={"issue_number": issue_number, "body": body},
        )


class CommandInterpreter:
    def __init__(
        self,
        poster: CommentPoster,
        *,
        non_command_policy: NonCommandPolicy,
        rejection_policy: RejectionPolicy = RejectionPolicy.FAIL,
    ) -> None:
        self._poster = poster
        self._non_command_policy = non_command_policy
        self._rejection_policy = rejection_policy

    def handle(self, event: TriggerEvent) -> RunParameters:
        """Return run parameters for `event`, reporting any rejection first.

        Raises:
            CommandRejectedError: the event was rejected and the policy is FAIL.
        """

        result = interpret(event, non_command_policy=self._non_command_policy)
        if isinstance(result, RunParameters):
            logger.info(
                "Run parameters resolved",
                extra={
                    "event": event.name,
                    "kind": event.kind.value,
                    "parameters": result.to_outputs(),
                },
            )
            return result

        self._report(event, result)

        if self._rejection_policy is RejectionPolicy.SKIP:
            logger.warning("Skipping test run after rejection", extra={"reason": result.reason.value})
            return RunParameters.skipped()
        raise CommandRejectedError(result)

    def _report(self, event: TriggerEvent, rejection: Rejected) -> None:
        logger.error(
            rejection.summary,
            extra={
                "event": event.name,
                "reason": rejection.reason.value,
                "issue_number": event.issue_number,
            },
        )
        if event.issue_number is None:
            return
        # Single attempt; a failure here terminates the run.
        self._poster.post_comment(issue_number=event.issue_number, body=rejection.message)
        logger.info("Posted rejection comment", extra={"issue_number": event.issue_number})
