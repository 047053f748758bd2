"""Grammar and validation for the ``/run-tests`` slash command.

This module is pure: it never posts comments, logs, or raises for user input.
Invalid commands are returned as a :class:`Rejected` value so that the caller
decides how to report them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .parameters import (
    ALLOWED_BOOLEANS,
    ALLOWED_ENVIRONMENTS,
    ALLOWED_GROUPS,
    ALLOWED_MODULES,
    RunParameters,
)

COMMAND = "/run-tests"
COMMAND_GRAMMAR = (
    f"{COMMAND} <env> <module> <group> "
    "<enablePKCE> <enableTestRetry> <enableXrayReport> <enableSlackReport>"
)
EXPECTED_TOKEN_COUNT = 8
TOKEN_COUNT_FIELD = "token_count"
COMMAND_FIELD = "command"

BOOLEAN_FLAGS: tuple[str, ...] = (
    "enablePKCE",
    "enableTestRetry",
    "enableXrayReport",
    "enableSlackReport",
)


class RejectionReason(str, Enum):
    FORMAT_ERROR = "format_error"
    VALUE_ERROR = "value_error"
    BOOLEAN_ERROR = "boolean_error"
    UNSUPPORTED_EVENT = "unsupported_event"


@dataclass(frozen=True, slots=True)
class Rejected:
    """A command (or event) that cannot be turned into run parameters.

    `message` is markdown suitable for an issue comment; `summary` is a single
    line for the CI log.
    """

    reason: RejectionReason
    message: str
    field: str | None = None
    value: str | None = None

    @property
    def summary(self) -> str:
        if self.reason is RejectionReason.UNSUPPORTED_EVENT:
            return f"Unsupported trigger event: {self.value or '<empty>'}"
        if self.reason is RejectionReason.BOOLEAN_ERROR:
            return f"Invalid boolean value for {self.field}: {self.value}"
        if self.reason is RejectionReason.VALUE_ERROR:
            return f"Invalid {self.field}: {self.value}"
        if self.field == TOKEN_COUNT_FIELD:
            return (
                f"Invalid command format: expected {EXPECTED_TOKEN_COUNT} tokens, "
                f"got {self.value}"
            )
        return f"Invalid command: {self.value}"


def usage() -> str:
    """Return the command grammar as a fenced markdown block."""

    return f"```bash\n{COMMAND_GRAMMAR}\n```"


def is_run_tests_command(text: str) -> bool:
    return text.strip().startswith(COMMAND)


def _format_error(field: str, value: str, headline: str) -> Rejected:
    return Rejected(
        reason=RejectionReason.FORMAT_ERROR,
        message=f"{headline}\n{usage()}",
        field=field,
        value=value,
    )


def _value_error(field: str, value: str, allowed: tuple[str, ...]) -> Rejected:
    expected = ", ".join(allowed)
    return Rejected(
        reason=RejectionReason.VALUE_ERROR,
        message=(
            f"Invalid {field}: `{value}`. Expected one of: {expected}.\n"
            f"Usage:\n{usage()}"
        ),
        field=field,
        value=value,
    )


def _boolean_error(flag: str, value: str) -> Rejected:
    return Rejected(
        reason=RejectionReason.BOOLEAN_ERROR,
        message=f"```\nInvalid boolean value: {value} ({flag}). Expected 'true' or 'false'.\n```",
        field=flag,
        value=value,
    )


def _match_case_insensitive(value: str, allowed: tuple[str, ...]) -> str | None:
    folded = value.casefold()
    for candidate in allowed:
        if candidate.casefold() == folded:
            return candidate
    return None


def parse_command(text: str) -> RunParameters | Rejected:
    """Parse and validate a ``/run-tests`` comment body.

    Fields are validated in order (environment, module, group, then the four
    flags) and the first failure is returned.
    """

    tokens = text.strip().split()
    if len(tokens) != EXPECTED_TOKEN_COUNT:
        return _format_error(
            TOKEN_COUNT_FIELD,
            str(len(tokens)),
            "Invalid command format. Expected:",
        )
    if tokens[0] != COMMAND:
        return _format_error(
            COMMAND_FIELD,
            tokens[0],
            f"Invalid command. Expected command to start with {COMMAND}.",
        )

    _, env_arg, module_arg, group_arg, *flag_args = tokens

    environment = _match_case_insensitive(env_arg, ALLOWED_ENVIRONMENTS)
    if environment is None:
        return _value_error("environment", env_arg, ALLOWED_ENVIRONMENTS)

    # Module names are case-sensitive.
    if module_arg not in ALLOWED_MODULES:
        return _value_error("module", module_arg, ALLOWED_MODULES)

    group = _match_case_insensitive(group_arg, ALLOWED_GROUPS)
    if group is None:
        return _value_error("group", group_arg, ALLOWED_GROUPS)

    flags: list[bool] = []
    for flag, value in zip(BOOLEAN_FLAGS, flag_args, strict=True):
        if value not in ALLOWED_BOOLEANS:
            return _boolean_error(flag, value)
        flags.append(value == "true")

    pkce, retry, xray, slack = flags
    return RunParameters(
        environment=environment.lower(),
        module=module_arg,
        group=group.upper(),
        enable_pkce=pkce,
        enable_test_retry=retry,
        enable_xray_report=xray,
        enable_slack_report=slack,
    )
