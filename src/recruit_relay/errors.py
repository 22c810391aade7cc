"""Exception types raised at the edges of the relay."""

from __future__ import annotations


class RelayError(Exception):
    """Base error carrying a caller-safe message and an HTTP status."""

    status_code: int | None = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(RelayError):
    """Raised when caller input fails a required-field or type check."""

    status_code = 400


class ConfigurationError(RelayError):
    """Raised when a required webhook URL is not configured."""

    status_code = 500


class RelayRequestError(RelayError):
    """Raised by the client facade when the local relay call fails.

    ``status_code`` is ``None`` when the relay could not be reached at all.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
