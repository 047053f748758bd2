"""Unit tests for the command interpreter service (mocked comment poster)."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from run_tests_command.interpreter.command import RejectionReason
from run_tests_command.interpreter.events import EventKind, TriggerEvent
from run_tests_command.interpreter.github.client import GitHubClient
from run_tests_command.interpreter.parameters import RunParameters
from run_tests_command.interpreter.policy import NonCommandPolicy
from run_tests_command.interpreter.service import (
    CommandInterpreter,
    CommandRejectedError,
    LoggingCommentPoster,
    RejectionPolicy,
)


def _comment(body: str, issue_number: int = 12) -> TriggerEvent:
    return TriggerEvent(
        name="issue_comment",
        kind=EventKind.COMMENT,
        comment_body=body,
        issue_number=issue_number,
    )


def test_valid_command_does_not_post() -> None:
    poster = Mock(spec=GitHubClient)
    interpreter = CommandInterpreter(poster, non_command_policy=NonCommandPolicy.DEFAULTS)

    params = interpreter.handle(_comment("/run-tests UAT Websters ALL true true false false"))

    assert params.environment == "uat"
    assert params.enable_test_retry is True
    poster.post_comment.assert_not_called()


def test_rejection_posts_comment_and_raises() -> None:
    poster = Mock(spec=GitHubClient)
    interpreter = CommandInterpreter(poster, non_command_policy=NonCommandPolicy.DEFAULTS)

    with pytest.raises(CommandRejectedError) as excinfo:
        interpreter.handle(_comment("/run-tests FOO Websters SMOKE true false true false"))

    rejection = excinfo.value.rejection
    assert rejection.reason is RejectionReason.VALUE_ERROR
    assert "FOO" in str(excinfo.value)
    poster.post_comment.assert_called_once_with(issue_number=12, body=rejection.message)


def test_rejection_with_skip_policy_returns_skip() -> None:
    poster = Mock(spec=GitHubClient)
    interpreter = CommandInterpreter(
        poster,
        non_command_policy=NonCommandPolicy.DEFAULTS,
        rejection_policy=RejectionPolicy.SKIP,
    )

    params = interpreter.handle(_comment("/run-tests PROD Websters SMOKE maybe false true false"))

    assert params == RunParameters.skipped()
    assert poster.post_comment.call_count == 1
    assert "maybe" in poster.post_comment.call_args.kwargs["body"]


def test_rejection_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    poster = Mock(spec=GitHubClient)
    interpreter = CommandInterpreter(
        poster,
        non_command_policy=NonCommandPolicy.DEFAULTS,
        rejection_policy=RejectionPolicy.SKIP,
    )

    with caplog.at_level(logging.INFO):
        interpreter.handle(_comment("/run-tests PROD Websters SMOKE true false true"))

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].reason == "format_error"
    assert errors[0].issue_number == 12


def test_unsupported_event_is_not_posted() -> None:
    poster = Mock(spec=GitHubClient)
    interpreter = CommandInterpreter(poster, non_command_policy=NonCommandPolicy.DEFAULTS)

    with pytest.raises(CommandRejectedError) as excinfo:
        interpreter.handle(TriggerEvent(name="push", kind=EventKind.UNSUPPORTED))

    assert excinfo.value.rejection.reason is RejectionReason.UNSUPPORTED_EVENT
    poster.post_comment.assert_not_called()


def test_poster_failure_propagates() -> None:
    poster = Mock(spec=GitHubClient)
    poster.post_comment.side_effect = RuntimeError("boom")
    interpreter = CommandInterpreter(
        poster,
        non_command_policy=NonCommandPolicy.DEFAULTS,
        rejection_policy=RejectionPolicy.SKIP,
    )

    with pytest.raises(RuntimeError, match="boom"):
        interpreter.handle(_comment("/run-tests nope"))

    assert poster.post_comment.call_count == 1


def test_non_command_comment_never_posts() -> None:
    poster = Mock(spec=GitHubClient)
    interpreter = CommandInterpreter(poster, non_command_policy=NonCommandPolicy.SKIP)

    params = interpreter.handle(_comment("LGTM"))

    assert params.skip is True
    poster.post_comment.assert_not_called()


def test_logging_poster_only_logs(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        LoggingCommentPoster().post_comment(issue_number=5, body="hello")

    assert caplog.records[-1].issue_number == 5
    assert caplog.records[-1].body == "hello"
