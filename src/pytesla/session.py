"""Session state: remembered credentials and the current token slot."""

from __future__ import annotations

import threading

from pydantic import BaseModel, ConfigDict, Field

from pytesla.models.token import AuthToken


class Credentials(BaseModel):
    """Email/password pair kept only to re-authenticate transparently."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    email: str
    password: str = Field(repr=False)


class TokenStore:
    """Single slot holding the current :class:`AuthToken`.

    Tokens are immutable; the slot is swapped whole under a lock so readers
    observe either the previous token or the new one.
    """

    def __init__(self, token: AuthToken | None = None) -> None:
        self._lock = threading.Lock()
        self._token = token

    def current(self) -> AuthToken | None:
        with self._lock:
            return self._token

    def is_valid(self) -> bool:
        """``False`` when empty or when the stored token reports expiry."""
        token = self.current()
        return token is not None and token.is_valid

    def replace(self, token: AuthToken) -> None:
        with self._lock:
            self._token = token

    def clear(self) -> None:
        with self._lock:
            self._token = None
