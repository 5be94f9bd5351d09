"""Redaction of owner API payloads for DEBUG logs.

Three things never reach a log line in clear text: the account password and
OAuth secrets sent to ``/oauth/token``, the bearer or basic credentials in
``Authorization`` headers, and the per-vehicle streaming ``tokens``. VINs are
shortened to their last four characters, which is enough to tell two cars
apart. Emails are kept; they identify which account a trace belongs to.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "pin",
        "access_token",
        "refresh_token",
        "id_token",
        "client_secret",
        "token",
        "tokens",
        "authorization",
        "cookie",
    }
)

_VIN_KEYS: frozenset[str] = frozenset({"vin"})

# HTTP auth schemes whose credential part follows a single space.
_AUTH_SCHEMES: tuple[str, ...] = ("Bearer ", "Basic ")

_REDACTED = "<redacted>"


def _mask_vin(value: Any) -> Any:
    if not isinstance(value, str) or len(value) <= 4:
        return value
    return "*" * (len(value) - 4) + value[-4:]


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of *value* safe for DEBUG logs.

    Parameters
    ----------
    value : Any
        Request or response body, header mapping, model or scalar.
    max_string : int
        Strings longer than this are truncated.

    Returns
    -------
    Any
        Plain ``dict``/``list``/scalar structure with secrets replaced by
        ``"<redacted>"``.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, BaseModel):
        dumped = value.model_dump(by_alias=True, exclude_none=True, mode="json", exclude={"raw"})
        return redact_for_log(dumped, max_string=max_string, _depth=_depth + 1)

    if isinstance(value, str):
        for scheme in _AUTH_SCHEMES:
            if value.startswith(scheme):
                return f"{scheme}{_REDACTED}"
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            lowered = key.lower()
            if lowered in _SECRET_KEYS:
                redacted[key] = _REDACTED
            elif lowered in _VIN_KEYS:
                redacted[key] = _mask_vin(v)
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
