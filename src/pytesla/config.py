"""Client configuration for pytesla."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytesla._constants import (
    BASE_URL,
    CLIENT_ID,
    CLIENT_SECRET,
    MOCK_BASE_URL,
    STREAM_VALUES,
    STREAMING_BASE_URL,
)
from pytesla.exceptions import TeslaConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class TeslaConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Owner API base URL.
    mock_base_url : str
        Base URL substituted for ``base_url`` when ``use_mock_server`` is set.
    streaming_base_url : str
        Telemetry streaming host.
    mock_streaming_base_url : str
        Streaming host substituted when ``use_mock_server`` is set.
    use_mock_server : bool
        Route every endpoint to the mock hosts. Paths are unchanged.
    debug_enabled : bool
        Log requests and responses (redacted) at DEBUG level.
    client_id : str
        OAuth client id sent with the password grant.
    client_secret : str
        OAuth client secret sent with the password grant.
    request_timeout : float
        Total timeout in seconds for a single REST call. ``0`` disables it.
    stream_values : tuple[str, ...]
        Telemetry columns requested from the streaming host.
    """

    base_url: str = BASE_URL
    mock_base_url: str = MOCK_BASE_URL
    streaming_base_url: str = STREAMING_BASE_URL
    mock_streaming_base_url: str = MOCK_BASE_URL
    use_mock_server: bool = False
    debug_enabled: bool = False
    client_id: str = CLIENT_ID
    client_secret: str = CLIENT_SECRET
    request_timeout: float = 30.0
    stream_values: tuple[str, ...] = STREAM_VALUES

    @property
    def api_base_url(self) -> str:
        """Owner API base URL honouring ``use_mock_server``."""
        return (self.mock_base_url if self.use_mock_server else self.base_url).rstrip("/")

    @property
    def stream_base_url(self) -> str:
        """Streaming base URL honouring ``use_mock_server``."""
        base = self.mock_streaming_base_url if self.use_mock_server else self.streaming_base_url
        return base.rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> TeslaConfig:
        """Create configuration from environment variables.

        Reads optional ``TESLA_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TeslaConfig
            Populated configuration.

        Raises
        ------
        TeslaConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TESLA_BASE_URL": "base_url",
            "TESLA_MOCK_BASE_URL": "mock_base_url",
            "TESLA_STREAMING_BASE_URL": "streaming_base_url",
            "TESLA_MOCK_STREAMING_BASE_URL": "mock_streaming_base_url",
            "TESLA_CLIENT_ID": "client_id",
            "TESLA_CLIENT_SECRET": "client_secret",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "use_mock_server" not in overrides:
            config_kwargs["use_mock_server"] = _env_bool(env.get("TESLA_USE_MOCK_SERVER"), False)

        if "debug_enabled" not in overrides:
            config_kwargs["debug_enabled"] = _env_bool(env.get("TESLA_DEBUG"), False)

        timeout_env = env.get("TESLA_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise TeslaConfigError(f"TESLA_REQUEST_TIMEOUT must be a number, got {timeout_env!r}") from exc

        values_env = env.get("TESLA_STREAM_VALUES")
        if values_env is not None and "stream_values" not in overrides:
            values = tuple(v.strip() for v in values_env.split(",") if v.strip())
            if not values:
                raise TeslaConfigError("TESLA_STREAM_VALUES must list at least one column")
            config_kwargs["stream_values"] = values

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
