"""Telemetry record decoded from one streaming line."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError, field_validator

from pytesla._constants import STREAM_VALUES
from pytesla.exceptions import TeslaDecodeError
from pytesla.models._base import TeslaBaseModel

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


class StreamEvent(TeslaBaseModel):
    """One telemetry sample.

    The streaming host emits comma separated lines: an epoch-millisecond
    timestamp followed by the requested columns in request order. Empty
    columns (the car does not know the value) decode to ``None``.
    """

    timestamp: datetime
    speed: float | None = None
    odometer: float | None = None
    soc: int | None = None
    elevation: int | None = None
    est_heading: int | None = None
    est_lat: float | None = None
    est_lng: float | None = None
    power: float | None = None
    shift_state: str | None = None
    range: int | None = None
    est_range: int | None = None
    heading: int | None = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value
        ts = int(value)
        try:
            if ts >= _MS_THRESHOLD:
                return datetime.fromtimestamp(ts / 1000, tz=UTC)
            return datetime.fromtimestamp(ts, tz=UTC)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {ts}") from exc

    @classmethod
    def from_line(cls, line: str, values: Sequence[str] = STREAM_VALUES) -> StreamEvent:
        """Decode a streaming line requested with *values* columns.

        Raises
        ------
        TeslaDecodeError
            If the column count does not match or a column fails to parse.
        """
        columns = line.strip().split(",")
        names = ("timestamp", *values)
        if len(columns) != len(names):
            raise TeslaDecodeError(
                f"Stream line has {len(columns)} columns, expected {len(names)}: {line[:128]!r}",
            )
        raw = dict(zip(names, columns, strict=True))
        data: dict[str, Any] = {key: value for key, value in raw.items() if value != ""}
        data["raw"] = raw
        try:
            return cls.model_validate(data)
        except (ValidationError, ValueError, OverflowError) as exc:
            raise TeslaDecodeError(f"Stream line is not decodable: {line[:128]!r}") from exc
