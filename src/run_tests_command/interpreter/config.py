"""Configuration for the run-tests command interpreter.

Configuration is loaded from:
- environment variables (the GitHub Actions runner sets most of them)
- and a local `.env` file (if present)

A dedicated `RUN_TESTS_GITHUB_TOKEN` takes precedence over the runner's
`GITHUB_TOKEN`, so a token with wider permissions can be supplied explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .policy import NonCommandPolicy
from .service import RejectionPolicy


class InterpreterSettings(BaseSettings):
    """Settings for the interpreter.

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `InterpreterSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("RUN_TESTS_GITHUB_TOKEN", "GITHUB_TOKEN"),
        description="GitHub token used to post rejection comments",
    )
    github_repository: str = Field(
        default="",
        validation_alias="GITHUB_REPOSITORY",
        description="Repository in the form 'owner/repo'",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    github_event_name: str = Field(
        default="",
        validation_alias="GITHUB_EVENT_NAME",
        description="Name of the event that triggered the workflow",
    )
    github_event_path: Path | None = Field(
        default=None,
        validation_alias="GITHUB_EVENT_PATH",
        description="Path to the JSON event payload",
    )
    github_output: Path | None = Field(
        default=None,
        validation_alias="GITHUB_OUTPUT",
        description="Step output file; outputs go to stdout when unset",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_format: Literal["json", "actions"] = Field(
        default="json",
        validation_alias="RUN_TESTS_LOG_FORMAT",
        description="'json' for structured logs, 'actions' for workflow command annotations",
    )

    non_command_policy: NonCommandPolicy = Field(
        default=NonCommandPolicy.DEFAULTS,
        validation_alias="RUN_TESTS_NON_COMMAND_POLICY",
        description=(
            "Outcome for a comment that is not a /run-tests command: "
            "'defaults' runs the default test set, 'skip' runs nothing"
        ),
    )
    rejection_policy: RejectionPolicy = Field(
        default=RejectionPolicy.FAIL,
        validation_alias="RUN_TESTS_REJECTION_POLICY",
        description="'fail' exits non-zero on an invalid command, 'skip' exits cleanly",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    def require_github_auth(self) -> None:
        """Ensure a rejection comment could be posted."""

        if not self.github_token.strip():
            raise ValueError("GITHUB_TOKEN (or RUN_TESTS_GITHUB_TOKEN) is required")
        if not self.github_repository.strip():
            raise ValueError("GITHUB_REPOSITORY is required")
