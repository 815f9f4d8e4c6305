"""Windows protocol handler registration."""

from __future__ import annotations

import logging
from typing import Any

from viewsvn.protocol_handler.registry import write_registration
from viewsvn.protocol_handler.shared import command_template

REGISTRY_ROOTS = ("classes_root", "current_user")


class WinregStore:
    """Registry store backed by winreg.

    `classes_root` writes under HKEY_CLASSES_ROOT and usually needs an
    elevated process; `current_user` writes under
    HKEY_CURRENT_USER\\Software\\Classes.
    """

    def __init__(self, root: str = "classes_root") -> None:
        if root not in REGISTRY_ROOTS:
            raise ValueError(f"Unknown registry root: {root}")
        import winreg

        self._winreg = winreg
        self.root = root
        self._base: Any = None
        self._handles: list[Any] = []

    def __enter__(self) -> WinregStore:
        winreg = self._winreg
        if self.root == "current_user":
            self._base = winreg.CreateKeyEx(
                winreg.HKEY_CURRENT_USER, r"Software\Classes", 0, winreg.KEY_ALL_ACCESS
            )
            self._handles.append(self._base)
        else:
            self._base = winreg.HKEY_CLASSES_ROOT
        return self

    def __exit__(self, *exc_info: object) -> None:
        while self._handles:
            self._handles.pop().Close()

    def create_or_open_key(self, parent: Any | None, name: str) -> tuple[Any, bool]:
        winreg = self._winreg
        parent = self._base if parent is None else parent
        try:
            key = winreg.OpenKey(parent, name, 0, winreg.KEY_ALL_ACCESS)
            created = False
        except FileNotFoundError:
            key = winreg.CreateKeyEx(parent, name, 0, winreg.KEY_ALL_ACCESS)
            created = True
        self._handles.append(key)
        return key, created

    def set_value(self, key: Any, name: str, value: str) -> None:
        self._winreg.SetValueEx(key, name, 0, self._winreg.REG_SZ, value)


def register_protocol_handler(root: str = "classes_root", logger: logging.Logger | None = None) -> None:
    """Register viewsvn:// by writing the URL protocol keys with winreg.

    Side effects: creates or overwrites the registry keys for the URL protocol handler.
    """
    with WinregStore(root) as store:
        write_registration(store, command_template(), logger=logger)
