"""Authentication token model."""

from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AuthToken(BaseModel):
    """Token returned by the OAuth password grant.

    Parameters
    ----------
    access_token : str
        Bearer token sent on every authenticated call.
    token_type : str
        Token type reported by the server (``"bearer"``).
    refresh_token : str or None
        Refresh token, when issued.
    expires_in : float or None
        Lifetime in seconds. ``None`` means the server did not say.
    created_at : float or None
        Epoch seconds at which the token was issued. Defaults to *now*
        when the server omits it but reports ``expires_in``.
    raw : dict
        Full decoded token dict for access to additional fields.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = Field(min_length=1)
    token_type: str = "bearer"
    refresh_token: str | None = None
    expires_in: float | None = None
    created_at: float | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", dict(values))
        if merged.get("expires_in") is not None and merged.get("created_at") is None:
            merged["created_at"] = time.time()
        return merged

    @property
    def expires_at(self) -> float | None:
        """Epoch seconds at which the token stops being valid, if known."""
        if self.expires_in is None or self.created_at is None:
            return None
        return self.created_at + self.expires_in

    @property
    def is_valid(self) -> bool:
        """Whether the token has not yet reached its expiry."""
        expires_at = self.expires_at
        if expires_at is None:
            return True
        return time.time() < expires_at
