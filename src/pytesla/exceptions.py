"""Custom exception hierarchy for pytesla."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytesla.models.envelope import ErrorMessage


class TeslaError(Exception):
    """Base exception for all pytesla errors."""


class TeslaConfigError(TeslaError):
    """Invalid or missing configuration."""


class TeslaTransportError(TeslaError):
    """Network-level failure (connection refused, reset, timeout, dropped stream)."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class TeslaDecodeError(TeslaError):
    """Response body missing or not decodable into the expected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class TeslaApiError(TeslaError):
    """API returned a non-2xx status.

    ``server_message`` holds the decoded error envelope when the server sent
    one, ``None`` otherwise.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int,
        server_message: ErrorMessage | None = None,
        endpoint: str = "",
    ) -> None:
        self.status = status
        self.server_message = server_message
        self.endpoint = endpoint
        super().__init__(message)


class TeslaAuthenticationError(TeslaError):
    """Base for authentication problems."""


class TeslaAuthenticationFailedError(TeslaAuthenticationError):
    """The authentication endpoint rejected the credentials (HTTP 401).

    Distinct from :class:`TeslaApiError` so callers can prompt for new
    credentials instead of retrying.
    """


class TeslaAuthenticationRequiredError(TeslaAuthenticationError):
    """No usable token and no stored credentials to re-authenticate with."""


class TeslaInvalidOptionsForCommandError(TeslaError):
    """Command or vehicle cannot be turned into a request, e.g. a vehicle without ``id``."""


class TeslaStreamingCredentialsMissingError(TeslaError):
    """Email or vehicle streaming token unavailable when opening a stream."""
