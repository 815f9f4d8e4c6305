"""macOS protocol handler registration."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

from viewsvn.errors import RegistrationFailed
from viewsvn.protocol_handler.shared import LOGGER, SCHEME, command_template

BUNDLE_NAME = "viewsvn Protocol Handler.app"
LSREGISTER = Path(
    "/System/Library/Frameworks/CoreServices.framework/Frameworks/LaunchServices.framework/Support/lsregister"
)


def info_plist(executable_name: str) -> str:
    return textwrap.dedent(
        f"""\
        <?xml version="1.0" encoding="UTF-8"?>
        <!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
        <plist version="1.0">
          <dict>
            <key>CFBundleName</key>
            <string>viewsvn Protocol Handler</string>
            <key>CFBundleIdentifier</key>
            <string>com.viewsvn.protocol-handler</string>
            <key>CFBundleExecutable</key>
            <string>{executable_name}</string>
            <key>CFBundlePackageType</key>
            <string>APPL</string>
            <key>LSUIElement</key>
            <true/>
            <key>CFBundleURLTypes</key>
            <array>
              <dict>
                <key>CFBundleURLName</key>
                <string>Subversion Log Link</string>
                <key>CFBundleURLSchemes</key>
                <array>
                  <string>{SCHEME}</string>
                </array>
              </dict>
            </array>
          </dict>
        </plist>
        """
    )


def register_protocol_handler() -> Path:
    """Register viewsvn:// by writing an app bundle in ~/Applications and updating LaunchServices.

    Side effects: creates or overwrites the bundle's handler script and Info.plist, and
    invokes lsregister to update the URL scheme registry.
    """
    bundle_dir = Path.home() / "Applications" / BUNDLE_NAME
    contents_dir = bundle_dir / "Contents"
    macos_dir = contents_dir / "MacOS"
    executable_path = macos_dir / "viewsvn-handler"

    macos_dir.mkdir(parents=True, exist_ok=True)

    executable_path.write_text(
        textwrap.dedent(
            f"""\
            #!/bin/bash
            exec {command_template('"$1"')}
            """
        ),
        encoding="utf-8",
    )
    executable_path.chmod(0o755)
    (contents_dir / "Info.plist").write_text(info_plist(executable_path.name), encoding="utf-8")
    LOGGER.info("Wrote handler bundle %s", bundle_dir)

    if not LSREGISTER.exists():
        raise RegistrationFailed("LaunchServices registry tool not found.")

    result = subprocess.run([str(LSREGISTER), "-f", str(bundle_dir)], check=False)
    if result.returncode != 0:
        raise RegistrationFailed(f"lsregister exited with status {result.returncode}.")
    return bundle_dir
