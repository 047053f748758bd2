"""CLI entrypoint for the run-tests command interpreter."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from run_tests_command import __version__
from run_tests_command.interpreter.command import RejectionReason, parse_command, usage
from run_tests_command.interpreter.config import InterpreterSettings
from run_tests_command.interpreter.events import (
    EventPayloadError,
    TriggerEvent,
    load_event_payload,
)
from run_tests_command.interpreter.github.client import GitHubClient
from run_tests_command.interpreter.logging import configure_logging
from run_tests_command.interpreter.outputs import GitHubOutputFile, OutputSink, StreamOutput
from run_tests_command.interpreter.parameters import RunParameters
from run_tests_command.interpreter.policy import NonCommandPolicy
from run_tests_command.interpreter.service import (
    CommandInterpreter,
    CommandRejectedError,
    CommentPoster,
    LoggingCommentPoster,
    RejectionPolicy,
)

logger = logging.getLogger(__name__)

# Exit codes are designed to be CI-friendly.
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_REJECTED = 3
EXIT_UNSUPPORTED_EVENT = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run-tests-command",
        description="Interpret /run-tests slash commands into test-run parameters",
    )
    parser.add_argument("--version", action="version", version=f"run-tests-command {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser(
        "interpret",
        help="Interpret the current workflow event and write step outputs",
    )
    run.add_argument(
        "--event-name",
        default=None,
        help="Trigger event name (defaults to GITHUB_EVENT_NAME)",
    )
    run.add_argument(
        "--event-path",
        default=None,
        help="Path to the JSON event payload (defaults to GITHUB_EVENT_PATH)",
    )
    run.add_argument(
        "--output",
        default=None,
        help="Step output file (defaults to GITHUB_OUTPUT; stdout as JSON when unset)",
    )
    run.add_argument(
        "--non-command",
        choices=[p.value for p in NonCommandPolicy],
        default=None,
        help="Outcome for comments that are not /run-tests commands "
        "(defaults to RUN_TESTS_NON_COMMAND_POLICY)",
    )
    run.add_argument(
        "--on-reject",
        choices=[p.value for p in RejectionPolicy],
        default=None,
        help="Fail the job or emit skip=true on an invalid command "
        "(defaults to RUN_TESTS_REJECTION_POLICY)",
    )
    run.add_argument(
        "--dry-run",
        action="store_true",
        help="Log rejection comments instead of posting them to GitHub",
    )

    parse = subparsers.add_parser(
        "parse",
        help="Validate a /run-tests comment locally without side effects",
    )
    parse.add_argument("text", help="Comment body, e.g. '/run-tests UAT Websters SMOKE ...'")

    subparsers.add_parser("usage", help="Print the /run-tests command grammar")

    return parser


class _LazyGitHubPoster:
    """Connect to GitHub only when a rejection comment actually has to be posted."""

    def __init__(self, settings: InterpreterSettings) -> None:
        self._settings = settings
        self._client: GitHubClient | None = None

    def post_comment(self, *, issue_number: int, body: str) -> None:
        if self._client is None:
            self._settings.require_github_auth()
            self._client = GitHubClient(
                token=self._settings.github_token,
                repository=self._settings.github_repository,
                base_url=self._settings.github_api_url,
            )
        self._client.post_comment(issue_number=issue_number, body=body)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


def _read_event(settings: InterpreterSettings, args: argparse.Namespace) -> TriggerEvent:
    event_name = args.event_name or settings.github_event_name
    if not event_name.strip():
        raise EventPayloadError("No event name given (set GITHUB_EVENT_NAME or --event-name)")

    event_path = Path(args.event_path) if args.event_path else settings.github_event_path
    payload = load_event_payload(event_path) if event_path is not None else {}
    return TriggerEvent.from_github(event_name, payload)


def _output_path(settings: InterpreterSettings, args: argparse.Namespace) -> Path | None:
    return Path(args.output) if args.output else settings.github_output


def _stdout_carries_json(settings: InterpreterSettings, args: argparse.Namespace) -> bool:
    if args.command == "parse":
        return True
    return args.command == "interpret" and _output_path(settings, args) is None


def _output_sink(settings: InterpreterSettings, args: argparse.Namespace) -> OutputSink:
    output_path = _output_path(settings, args)
    if output_path is None:
        return StreamOutput(sys.stdout)
    return GitHubOutputFile(output_path)


def _interpret(settings: InterpreterSettings, args: argparse.Namespace) -> int:
    try:
        event = _read_event(settings, args)
    except (EventPayloadError, OSError) as e:
        logger.error("Cannot read trigger event", extra={"error": str(e)})
        return EXIT_CONFIG_ERROR

    non_command_policy = (
        NonCommandPolicy(args.non_command) if args.non_command else settings.non_command_policy
    )
    rejection_policy = (
        RejectionPolicy(args.on_reject) if args.on_reject else settings.rejection_policy
    )

    poster: CommentPoster
    if args.dry_run:
        poster = LoggingCommentPoster()
    else:
        poster = _LazyGitHubPoster(settings)

    sink = _output_sink(settings, args)
    interpreter = CommandInterpreter(
        poster,
        non_command_policy=non_command_policy,
        rejection_policy=rejection_policy,
    )

    try:
        params = interpreter.handle(event)
    except CommandRejectedError as e:
        if e.rejection.reason is RejectionReason.UNSUPPORTED_EVENT:
            return EXIT_UNSUPPORTED_EVENT
        return EXIT_REJECTED
    except ValueError as e:
        # Raised before any comment is posted, e.g. missing GitHub credentials.
        logger.error("Configuration error", extra={"error": str(e)})
        return EXIT_CONFIG_ERROR
    finally:
        if isinstance(poster, _LazyGitHubPoster):
            poster.close()

    sink.write(params.to_outputs())
    return EXIT_OK


def _parse(text: str) -> int:
    result = parse_command(text)
    if isinstance(result, RunParameters):
        print(json.dumps(result.to_outputs(), indent=2))
        return EXIT_OK
    print(result.message, file=sys.stderr)
    return EXIT_REJECTED


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "usage":
        print(usage())
        return EXIT_OK

    try:
        settings = InterpreterSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment / .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIG_ERROR

    # Logs must not interleave with JSON written to stdout.
    log_stream = sys.stderr if _stdout_carries_json(settings, args) else sys.stdout
    configure_logging(settings.log_level, settings.log_format, stream=log_stream)

    try:
        if args.command == "interpret":
            return _interpret(settings, args)

        if args.command == "parse":
            return _parse(args.text)

        logger.error("Unknown command", extra={"command": args.command})
        return EXIT_CONFIG_ERROR

    except Exception:
        logger.exception("Command failed")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
