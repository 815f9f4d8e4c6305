"""In-memory stand-ins for the registry store and the process runner."""

from __future__ import annotations

from typing import Sequence

from viewsvn.launcher import LaunchResult


class FakeRegistryStore:
    """Registry keys addressed by their path from the protocol root."""

    def __init__(self) -> None:
        self.values: dict[tuple[str, ...], dict[str, str]] = {}

    def create_or_open_key(self, parent: tuple[str, ...] | None, name: str) -> tuple[tuple[str, ...], bool]:
        path = (*(parent or ()), name)
        created = path not in self.values
        self.values.setdefault(path, {})
        return path, created

    def set_value(self, key: tuple[str, ...], name: str, value: str) -> None:
        self.values[key][name] = value


class FakeRunner:
    def __init__(self, result: LaunchResult | None = None, error: Exception | None = None) -> None:
        self.result = result or LaunchResult(returncode=0, stdout="")
        self.error = error
        self.calls: list[list[str]] = []

    def run(self, argv: Sequence[str]) -> LaunchResult:
        self.calls.append(list(argv))
        if self.error is not None:
            raise self.error
        return self.result
