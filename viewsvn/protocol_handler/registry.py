"""Write the scheme -> shell -> open -> command key chain into a registry store."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from viewsvn.protocol_handler.shared import LOGGER, SCHEME


class RegistryStore(Protocol):
    """The two registry operations the registrar needs.

    A parent of None means the store's root (the protocol handler registry).
    """

    def create_or_open_key(self, parent: Any | None, name: str) -> tuple[Any, bool]:
        """Return the subkey handle and whether it was newly created."""
        ...

    def set_value(self, key: Any, name: str, value: str) -> None:
        ...


def _create_or_open(
    store: RegistryStore, parent: Any | None, name: str, logger: logging.Logger
) -> Any:
    key, created = store.create_or_open_key(parent, name)
    if created:
        logger.info("A new key has been created: %s", name)
    else:
        logger.info("An existing key has been opened: %s", name)
    return key


def write_registration(
    store: RegistryStore,
    command: str,
    *,
    logger: logging.Logger | None = None,
) -> None:
    """Point the viewsvn scheme at command, overwriting any previous values."""
    logger = logger or LOGGER
    root_key = _create_or_open(store, None, SCHEME, logger)
    store.set_value(root_key, "", f"URL:{SCHEME} Protocol")
    store.set_value(root_key, "URL Protocol", "")

    shell_key = _create_or_open(store, root_key, "shell", logger)
    open_key = _create_or_open(store, shell_key, "open", logger)
    command_key = _create_or_open(store, open_key, "command", logger)
    store.set_value(command_key, "", command)
