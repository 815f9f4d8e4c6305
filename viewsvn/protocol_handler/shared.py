"""Shared helpers for registering the viewsvn:// protocol handler."""

from __future__ import annotations

import logging
import sys

SCHEME = "viewsvn"
LOGGER = logging.getLogger(__name__)


def handler_invocation() -> str:
    """Return the quoted command line that starts this program.

    A frozen build is its own executable; otherwise the current interpreter
    runs the package as a module.
    """
    if getattr(sys, "frozen", False):
        return f'"{sys.executable}"'
    return f'"{sys.executable}" -m viewsvn'


def command_template(placeholder: str = '"%1"') -> str:
    return f"{handler_invocation()} --url {placeholder}"
