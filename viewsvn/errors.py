from __future__ import annotations

"""Errors raised while registering the protocol handler or dispatching a URL."""


class ViewSvnError(Exception):
    """Base class for every error reported by the CLI."""


class DispatchError(ViewSvnError):
    """A viewsvn:// URL could not be turned into a viewer launch."""


class InvalidUrl(DispatchError):
    def __init__(self, raw_url: str, reason: str) -> None:
        super().__init__(f"Error parsing URL {raw_url!r}: {reason}")
        self.raw_url = raw_url
        self.reason = reason


class UnsupportedScheme(DispatchError):
    def __init__(self, scheme: str) -> None:
        super().__init__(f"Unsupported protocol: {scheme}")
        self.scheme = scheme


class MissingParam(DispatchError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No {name} specified in url.")
        self.name = name


class InvalidServerUrl(DispatchError):
    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"Invalid server_url {value!r}: {reason}")
        self.value = value
        self.reason = reason


class InvalidRevision(DispatchError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Url revision was not a number: {value!r}")
        self.value = value


class LaunchFailed(DispatchError):
    def __init__(self, executable: str, reason: str) -> None:
        super().__init__(f"Failed to execute {executable}: {reason}")
        self.executable = executable
        self.reason = reason


class RegistrationFailed(ViewSvnError):
    """Writing the protocol handler association failed."""
