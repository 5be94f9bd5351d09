"""Typed response for vehicle command endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import model_validator

from pytesla.models._base import TeslaBaseModel


class CommandResponse(TeslaBaseModel):
    """Acknowledgement returned by every ``command/*`` and ``wake_up`` call.

    ``wake_up`` answers with the vehicle record instead of
    ``{"result", "reason"}``; that shape decodes with ``result=True`` so
    callers can treat all commands alike. Any other reply must carry
    ``result``.
    """

    result: bool
    reason: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _vehicle_record_is_success(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "result" in values:
            return values
        if "vehicle_id" not in values and "vin" not in values:
            return values
        merged = dict(values)
        merged.setdefault("raw", dict(values))
        merged["result"] = True
        return merged
