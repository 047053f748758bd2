"""Trigger events read from the GitHub Actions runtime."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

MANUAL_EVENTS: frozenset[str] = frozenset(
    {"workflow_dispatch", "pull_request", "pull_request_target"}
)

# Comment events and the payload key holding the issue or pull request number.
COMMENT_EVENTS: dict[str, str] = {
    "issue_comment": "issue",
    "pull_request_review_comment": "pull_request",
}


class EventPayloadError(ValueError):
    """Raised when an event payload lacks the fields its event type requires."""


class EventKind(str, Enum):
    MANUAL = "manual"
    COMMENT = "comment"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class TriggerEvent:
    """The CI event that invoked the interpreter.

    Only comment events carry a body and an issue (or pull request) number.
    """

    name: str
    kind: EventKind
    comment_body: str | None = None
    issue_number: int | None = None

    @staticmethod
    def from_github(event_name: str, payload: Mapping[str, Any]) -> TriggerEvent:
        name = event_name.strip()
        if name in MANUAL_EVENTS:
            return TriggerEvent(name=name, kind=EventKind.MANUAL)

        number_key = COMMENT_EVENTS.get(name)
        if number_key is None:
            return TriggerEvent(name=name, kind=EventKind.UNSUPPORTED)

        comment = payload.get("comment")
        body = comment.get("body") if isinstance(comment, Mapping) else None
        if not isinstance(body, str):
            raise EventPayloadError(f"{name} payload is missing comment.body")

        target = payload.get(number_key)
        number = target.get("number") if isinstance(target, Mapping) else None
        # bool is an int subclass; reject it explicitly.
        if not isinstance(number, int) or isinstance(number, bool) or number <= 0:
            raise EventPayloadError(f"{name} payload is missing {number_key}.number")

        return TriggerEvent(
            name=name,
            kind=EventKind.COMMENT,
            comment_body=body,
            issue_number=number,
        )


def load_event_payload(path: Path) -> dict[str, Any]:
    """Read the JSON event payload written by the runner (``GITHUB_EVENT_PATH``)."""

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"Event payload at {path} is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise EventPayloadError(f"Event payload at {path} must be a JSON object")
    return raw
