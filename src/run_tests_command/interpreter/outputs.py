"""Step output sinks.

GitHub Actions passes step outputs through the file named by ``GITHUB_OUTPUT``;
locally we print JSON instead.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, TextIO


class OutputSink(Protocol):
    def write(self, outputs: Mapping[str, str]) -> None: ...


class GitHubOutputFile:
    """Append ``key=value`` lines to the ``GITHUB_OUTPUT`` file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def write(self, outputs: Mapping[str, str]) -> None:
        lines: list[str] = []
        for key, value in outputs.items():
            if "\n" in key or "\n" in value or "=" in key:
                raise ValueError(f"Output {key!r} cannot be written as a single key=value line")
            lines.append(f"{key}={value}\n")

        with self._path.open("a", encoding="utf-8") as fh:
            fh.writelines(lines)


class StreamOutput:
    """Write outputs as a single JSON object."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, outputs: Mapping[str, str]) -> None:
        self._stream.write(json.dumps(dict(outputs), ensure_ascii=False) + "\n")
        self._stream.flush()
