"""Version and build information."""

from __future__ import annotations

import json
import platform
import sys
from dataclasses import asdict, dataclass, replace
from typing import TextIO

from konf.errors import KonfError

# Set at build time; empty values fall back to the defaults below.
GIT_VERSION = ""
GIT_COMMIT = ""
BUILD_DATE = ""


@dataclass(frozen=True)
class VersionInfo:
    """Build and runtime information reported by 'konf version'."""

    GitVersion: str
    GitCommit: str
    BuildDate: str
    PythonVersion: str
    Platform: str
    Compiler: str


DEFAULT_VERSION_INFO = VersionInfo(
    GitVersion="dev",
    GitCommit="dev",
    BuildDate="1970-01-01T00:00:00Z",
    PythonVersion=platform.python_version(),
    Platform=f"{sys.platform}/{platform.machine()}",
    Compiler=platform.python_implementation(),
)


def version_string_with_overrides(git_version: str, git_commit: str, build_date: str) -> str:
    """Version info as compact JSON; empty overrides keep the defaults."""
    overrides = {
        key: value
        for key, value in (
            ("GitVersion", git_version),
            ("GitCommit", git_commit),
            ("BuildDate", build_date),
        )
        if value
    }
    info = replace(DEFAULT_VERSION_INFO, **overrides)
    return json.dumps(asdict(info), separators=(",", ":"), ensure_ascii=False)


@dataclass
class VersionCommand:
    """'konf version': print version and build info as JSON."""

    stdout: TextIO | None = None

    def run(self, args: list[str]) -> None:
        if args:
            raise KonfError(f"accepts 0 arg(s), received {len(args)}")
        print(
            version_string_with_overrides(GIT_VERSION, GIT_COMMIT, BUILD_DATE),
            file=self.stdout or sys.stdout,
        )