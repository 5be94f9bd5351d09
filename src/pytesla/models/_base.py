"""Base model for Tesla API response records.

Every resource model inherits from :class:`TeslaBaseModel` which provides:

* frozen, immutable snapshots;
* ``extra="ignore"`` so fields the API adds later do not break decoding;
* a ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TeslaBaseModel(BaseModel):
    """Base for Tesla API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Keep the payload as received unless the caller supplied ``raw``."""
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
