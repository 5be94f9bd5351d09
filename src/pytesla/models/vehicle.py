"""Vehicle model."""

from __future__ import annotations

from pydantic import Field, field_validator

from pytesla.models._base import TeslaBaseModel


class Vehicle(TeslaBaseModel):
    """A vehicle associated with the account.

    Fields are mapped from the ``/api/1/vehicles`` response. Snapshots are
    immutable; fetch a new one to observe changes, notably to pick up a
    fresh streaming token.
    """

    id: int | None = None
    """Identifier used in every ``/api/1/vehicles/{id}`` path."""
    vehicle_id: int | None = None
    """Identifier used by the streaming host."""
    id_s: str = ""
    """String rendition of ``id``."""
    vin: str = ""
    """Vehicle Identification Number."""
    display_name: str | None = None
    """User-defined vehicle name."""
    option_codes: str = ""
    """Comma separated factory option codes."""
    color: str | None = None
    state: str = ""
    """Connectivity state (``"online"``, ``"asleep"``, ``"offline"``)."""
    in_service: bool = False
    calendar_enabled: bool = False
    api_version: int | None = None
    tokens: list[str] = Field(default_factory=list)
    """Per-vehicle streaming tokens, freshest first."""

    @field_validator("tokens", mode="before")
    @classmethod
    def _tokens_or_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("option_codes", "state", "id_s", "vin", mode="before")
    @classmethod
    def _str_or_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("in_service", "calendar_enabled", mode="before")
    @classmethod
    def _bool_or_false(cls, value: object) -> object:
        return False if value is None else value

    @property
    def streaming_token(self) -> str | None:
        """First streaming token, if the API provided any."""
        return self.tokens[0] if self.tokens else None
