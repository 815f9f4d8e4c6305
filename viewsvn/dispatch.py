from __future__ import annotations

"""Translate a viewsvn:// URL into a TortoiseProc log command and run it.

URL format handled here:
- viewsvn://<anything>?server_url=<url-encoded url>&revision=<n>
- The authority and path are ignored, as are unknown query parameters.
- Duplicate query keys resolve to their last value.
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import SplitResult, parse_qsl, urlsplit

from viewsvn.errors import (
    InvalidRevision,
    InvalidServerUrl,
    InvalidUrl,
    MissingParam,
    UnsupportedScheme,
)
from viewsvn.launcher import ProcessRunner
from viewsvn.protocol_handler.shared import SCHEME

DEFAULT_VIEWER = "TortoiseProc.exe"
MAX_REVISION = 2**32 - 1
SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
REVISION_RE = re.compile(r"[0-9]+")
C0_CONTROL_OR_SPACE = "".join(chr(code) for code in range(0x21))
# Schemes that cannot be used without a host.
HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})
LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewRequest:
    revision: int
    server_url: str


@dataclass(frozen=True)
class LaunchCommand:
    executable: str
    revision: int
    server_url: str

    @property
    def arguments(self) -> list[str]:
        return ["/command:log", f"/startrev:{self.revision}", f"/path:{self.server_url}"]

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.arguments]


def split_url(value: str) -> SplitResult:
    """Split an absolute URL, rejecting anything a URL parser would refuse.

    Validation rules:
    - Leading and trailing spaces and C0 control characters are ignored.
    - A scheme followed by ":" must open the value.
    - http, https, ftp, ws and wss URLs need a host; the slashes before it
      may be missing or doubled up (http:host/path, http:/host/path).
    - A port, if present, must be numeric and in range.
    - The authority must not contain whitespace or control characters.

    Raises:
        ValueError: If the value is not a well-formed URL.
    """
    value = value.strip(C0_CONTROL_OR_SPACE)
    if not SCHEME_RE.match(value):
        raise ValueError("relative URL without a base")
    parts = urlsplit(value)
    if parts.scheme in HOST_REQUIRED_SCHEMES and not parts.netloc:
        rest = value[len(parts.scheme) + 1 :].lstrip("/\\")
        parts = urlsplit(f"{parts.scheme}://{rest}")
    parts.port  # raises ValueError for a bad port
    if any(char.isspace() or not char.isprintable() for char in parts.netloc):
        raise ValueError("invalid host character")
    if parts.scheme in HOST_REQUIRED_SCHEMES and not parts.hostname:
        raise ValueError("empty host")
    return parts


def query_as_map(parts: SplitResult) -> dict[str, str]:
    return dict(parse_qsl(parts.query, keep_blank_values=True))


def parse_revision(value: str) -> int:
    """Parse an unsigned 32-bit decimal revision with no sign or padding spaces."""
    if not REVISION_RE.fullmatch(value):
        raise InvalidRevision(value)
    revision = int(value)
    if revision > MAX_REVISION:
        raise InvalidRevision(value)
    return revision


def parse_invocation(raw_url: str) -> ViewRequest:
    """Validate a viewsvn:// URL and pull out the revision and server URL.

    Raises:
        DispatchError: The first failed check, in URL, scheme, server_url,
            revision order.
    """
    try:
        parts = split_url(raw_url)
    except ValueError as exc:
        raise InvalidUrl(raw_url, str(exc)) from exc

    if parts.scheme != SCHEME:
        raise UnsupportedScheme(parts.scheme)

    query = query_as_map(parts)

    server_url = query.get("server_url")
    if server_url is None:
        raise MissingParam("server_url")
    # Validate the url, but pass the string through untouched.
    try:
        split_url(server_url)
    except ValueError as exc:
        raise InvalidServerUrl(server_url, str(exc)) from exc

    revision = query.get("revision")
    if revision is None:
        raise MissingParam("revision")

    return ViewRequest(revision=parse_revision(revision), server_url=server_url)


def build_launch_command(request: ViewRequest, viewer: str = DEFAULT_VIEWER) -> LaunchCommand:
    return LaunchCommand(executable=viewer, revision=request.revision, server_url=request.server_url)


def dispatch(
    raw_url: str,
    *,
    runner: ProcessRunner,
    viewer: str = DEFAULT_VIEWER,
    logger: logging.Logger | None = None,
) -> LaunchCommand:
    """Open the log viewer for the revision and repository named in raw_url.

    The viewer runs synchronously; this returns once it exits. Nothing is
    launched unless every check in `parse_invocation` passes.

    Raises:
        DispatchError: If the URL is rejected or the viewer cannot be started.
    """
    logger = logger or LOGGER
    logger.debug("Dispatching url %s", raw_url)
    request = parse_invocation(raw_url)
    command = build_launch_command(request, viewer)
    logger.info(
        "Opening log for revision %s of %s with %s",
        command.revision,
        command.server_url,
        command.executable,
    )
    result = runner.run(command.argv)
    logger.debug("%s output: %s", command.executable, result.stdout)
    logger.info("Launched %s (exit status %s).", command.executable, result.returncode)
    return command
