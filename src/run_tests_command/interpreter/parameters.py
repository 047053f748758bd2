"""Run parameters produced for the calling test workflow."""

from __future__ import annotations

from dataclasses import dataclass, replace

ALLOWED_ENVIRONMENTS: tuple[str, ...] = ("PROD", "UAT", "INTG", "DEV")
ALLOWED_MODULES: tuple[str, ...] = ("Websters", "Klasters")
ALLOWED_GROUPS: tuple[str, ...] = ("REGRESSION", "SMOKE", "ALL")
ALLOWED_BOOLEANS: tuple[str, ...] = ("true", "false")

DEFAULT_ENVIRONMENT = "uat"
DEFAULT_MODULE = "Websters"
DEFAULT_GROUP = "REGRESSION"


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class RunParameters:
    """Parameters for a single test run.

    Normalisation:
      - environment is lower case (``prod``, ``uat``, ...)
      - group is upper case (``SMOKE``, ...)
      - module keeps its canonical spelling (``Websters``)
    """

    environment: str
    module: str
    group: str
    enable_pkce: bool = False
    enable_test_retry: bool = False
    enable_xray_report: bool = False
    enable_slack_report: bool = False
    skip: bool = False

    @classmethod
    def defaults(cls) -> RunParameters:
        return cls(environment=DEFAULT_ENVIRONMENT, module=DEFAULT_MODULE, group=DEFAULT_GROUP)

    @classmethod
    def skipped(cls) -> RunParameters:
        """Default parameters flagged so the workflow exits without running tests."""

        return replace(cls.defaults(), skip=True)

    def to_outputs(self) -> dict[str, str]:
        """Render as step outputs (string values only)."""

        return {
            "env": self.environment,
            "module": self.module,
            "group": self.group,
            "enablePKCE": _flag(self.enable_pkce),
            "enableTestRetry": _flag(self.enable_test_retry),
            "enableXrayReport": _flag(self.enable_xray_report),
            "enableSlackReport": _flag(self.enable_slack_report),
            "skip": _flag(self.skip),
        }
