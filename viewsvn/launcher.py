"""Run the external log viewer and capture what it prints."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from viewsvn.errors import LaunchFailed

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchResult:
    returncode: int
    stdout: str


class ProcessRunner(Protocol):
    def run(self, argv: Sequence[str]) -> LaunchResult:
        """Run argv to completion, raising LaunchFailed if it cannot start."""
        ...


class SubprocessRunner:
    """Start the viewer with subprocess and block until it exits.

    The child's exit status is reported back, not judged: only a failure to
    start the process at all is an error.
    """

    def __init__(self, timeout_seconds: int | None = None) -> None:
        self.timeout_seconds = timeout_seconds or None

    def run(self, argv: Sequence[str]) -> LaunchResult:
        executable = argv[0]
        try:
            completed = subprocess.run(
                list(argv),
                stdout=subprocess.PIPE,
                check=False,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            raise LaunchFailed(executable, f"timed out after {exc.timeout} seconds") from exc
        except OSError as exc:
            raise LaunchFailed(executable, str(exc)) from exc
        stdout = completed.stdout.decode("utf-8", errors="replace") if completed.stdout else ""
        LOGGER.debug("%s exited with status %s", executable, completed.returncode)
        return LaunchResult(returncode=completed.returncode, stdout=stdout)
