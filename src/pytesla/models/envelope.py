"""Transport-level envelopes wrapping every REST payload."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from pytesla.models._base import TeslaBaseModel

T = TypeVar("T")


class Response(BaseModel, Generic[T]):
    """The ``{"response": ...}`` wrapper used by every owner API reply."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    response: T


class ErrorMessage(TeslaBaseModel):
    """Structured error body returned with non-2xx statuses."""

    error: str | None = None
    error_description: str | None = None

    @property
    def message(self) -> str:
        """Best human-readable description available."""
        return self.error_description or self.error or ""
