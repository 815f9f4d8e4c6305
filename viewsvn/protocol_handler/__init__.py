"""Register the viewsvn:// protocol handler for the current platform."""

from __future__ import annotations

import platform

from viewsvn.errors import RegistrationFailed
from viewsvn.protocol_handler.linux import register_protocol_handler as _register_linux
from viewsvn.protocol_handler.macos import register_protocol_handler as _register_macos
from viewsvn.protocol_handler.shared import LOGGER, SCHEME
from viewsvn.protocol_handler.windows import register_protocol_handler as _register_windows


def register_protocol_handler(registry_root: str = "classes_root") -> None:
    """Register the URL scheme handler for the current platform.

    Running it again rewrites the same values, so repeated calls are safe.

    Raises:
        RegistrationFailed: If the platform is unsupported or the OS store rejects the write.
    """
    system = platform.system()
    try:
        if system == "Windows":
            _register_windows(registry_root)
        elif system == "Darwin":
            _register_macos()
        elif system == "Linux":
            _register_linux()
        else:
            raise RegistrationFailed(f"Protocol handler registration is not supported on {system}.")
    except OSError as exc:
        raise RegistrationFailed(f"Failed to register protocol: {exc}") from exc

    LOGGER.info("Successfully registered URI handler for '%s'", SCHEME)
