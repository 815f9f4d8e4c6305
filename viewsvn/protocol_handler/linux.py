"""Linux protocol handler registration."""

from __future__ import annotations

import os
import shutil
import subprocess
import textwrap
from pathlib import Path

from viewsvn.errors import RegistrationFailed
from viewsvn.protocol_handler.shared import LOGGER, SCHEME, command_template

DESKTOP_FILE_NAME = "viewsvn.desktop"


def desktop_entry() -> str:
    return textwrap.dedent(
        f"""\
        [Desktop Entry]
        Name=viewsvn
        Comment=Open Subversion logs from {SCHEME}:// links
        Exec={command_template("%u")}
        Terminal=false
        Type=Application
        NoDisplay=true
        MimeType=x-scheme-handler/{SCHEME};
        """
    )


def register_protocol_handler() -> Path:
    """Register viewsvn:// by writing a .desktop file and calling xdg-mime.

    Side effects: creates or overwrites ~/.local/share/applications/viewsvn.desktop
    (or under XDG_DATA_HOME) and updates the MIME association via xdg-mime.
    """
    xdg_data_home = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local/share"))
    applications_dir = xdg_data_home / "applications"
    applications_dir.mkdir(parents=True, exist_ok=True)

    desktop_file = applications_dir / DESKTOP_FILE_NAME
    desktop_file.write_text(desktop_entry(), encoding="utf-8")
    LOGGER.info("Wrote desktop entry %s", desktop_file)

    xdg_mime = shutil.which("xdg-mime")
    if not xdg_mime:
        raise RegistrationFailed("xdg-mime not found; cannot set the x-scheme-handler default.")

    result = subprocess.run(
        [xdg_mime, "default", desktop_file.name, f"x-scheme-handler/{SCHEME}"],
        check=False,
    )
    if result.returncode != 0:
        raise RegistrationFailed(f"xdg-mime exited with status {result.returncode}.")
    return desktop_file
