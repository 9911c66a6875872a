"""Exception hierarchy for the Grouchy Spouse client.

ConfigurationError is fatal at startup. Everything else is scoped to the
turn that raised it.
"""

from __future__ import annotations


class GrouchyError(Exception):
    """Base class for all client errors."""


class ConfigurationError(GrouchyError):
    """Missing credentials, unsupported platform or invalid settings."""


class MalformedResponse(GrouchyError):
    """A remote service answered with JSON we could not understand."""


class TransportError(GrouchyError):
    """Network failure or non-2xx answer from a remote service.

    Attributes:
        status_code: HTTP status when the server answered, else None.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PlaybackError(GrouchyError):
    """The local audio player could not play a file."""
