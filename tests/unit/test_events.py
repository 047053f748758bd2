"""Unit tests for trigger event parsing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from run_tests_command.interpreter.events import (
    EventKind,
    EventPayloadError,
    TriggerEvent,
    load_event_payload,
)


@pytest.mark.parametrize("name", ["workflow_dispatch", "pull_request", "pull_request_target"])
def test_manual_events_ignore_payload(name: str) -> None:
    event = TriggerEvent.from_github(name, {"comment": {"body": "/run-tests"}})

    assert event.kind is EventKind.MANUAL
    assert event.comment_body is None
    assert event.issue_number is None


def test_issue_comment_reads_issue_number() -> None:
    payload = {"comment": {"body": "/run-tests UAT"}, "issue": {"number": 42}}

    event = TriggerEvent.from_github("issue_comment", payload)

    assert event == TriggerEvent(
        name="issue_comment",
        kind=EventKind.COMMENT,
        comment_body="/run-tests UAT",
        issue_number=42,
    )


def test_review_comment_reads_pull_request_number() -> None:
    payload = {"comment": {"body": "hi"}, "pull_request": {"number": 7}, "issue": {"number": 1}}

    event = TriggerEvent.from_github("pull_request_review_comment", payload)

    assert event.kind is EventKind.COMMENT
    assert event.issue_number == 7


def test_unknown_event_is_unsupported() -> None:
    event = TriggerEvent.from_github("push", {})

    assert event.kind is EventKind.UNSUPPORTED
    assert event.name == "push"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"comment": {}, "issue": {"number": 1}},
        {"comment": {"body": 5}, "issue": {"number": 1}},
        {"comment": {"body": "x"}},
        {"comment": {"body": "x"}, "issue": {"number": 0}},
        {"comment": {"body": "x"}, "issue": {"number": True}},
        {"comment": {"body": "x"}, "issue": {"number": "3"}},
    ],
)
def test_malformed_comment_payload_raises(payload: dict[str, object]) -> None:
    with pytest.raises(EventPayloadError):
        TriggerEvent.from_github("issue_comment", payload)


def test_load_event_payload(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"issue": {"number": 3}}), encoding="utf-8")

    assert load_event_payload(path) == {"issue": {"number": 3}}


def test_load_event_payload_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(EventPayloadError):
        load_event_payload(path)


def test_load_event_payload_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(EventPayloadError):
        load_event_payload(path)
