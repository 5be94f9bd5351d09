"""Endpoint catalog: logical operation -> HTTP method, path and host.

Endpoints are plain values built per call. The host is chosen when the URL
is rendered, so toggling ``TeslaConfig.use_mock_server`` redirects every
endpoint without touching its path.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Sequence
from urllib.parse import quote

from pytesla.config import TeslaConfig
from pytesla.models.command import VehicleCommand


class Host(enum.Enum):
    OWNER_API = "owner_api"
    STREAMING = "streaming"


@dataclasses.dataclass(frozen=True)
class Endpoint:
    """A resolved ``{method, path, host}`` triple for one operation."""

    method: str
    path: str
    host: Host = Host.OWNER_API

    def url(self, config: TeslaConfig) -> str:
        """Absolute URL on the production or mock host."""
        base = config.stream_base_url if self.host is Host.STREAMING else config.api_base_url
        return f"{base}{self.path}"


def _vehicle_path(vehicle_id: int | str, suffix: str) -> str:
    return f"/api/1/vehicles/{vehicle_id}/{suffix}"


def authentication() -> Endpoint:
    return Endpoint("POST", "/oauth/token")


def vehicles() -> Endpoint:
    return Endpoint("GET", "/api/1/vehicles")


def all_states(vehicle_id: int | str) -> Endpoint:
    return Endpoint("GET", _vehicle_path(vehicle_id, "vehicle_data"))


def mobile_access(vehicle_id: int | str) -> Endpoint:
    return Endpoint("GET", _vehicle_path(vehicle_id, "mobile_enabled"))


def charge_state(vehicle_id: int | str) -> Endpoint:
    return Endpoint("GET", _vehicle_path(vehicle_id, "data_request/charge_state"))


def climate_state(vehicle_id: int | str) -> Endpoint:
    return Endpoint("GET", _vehicle_path(vehicle_id, "data_request/climate_state"))


def drive_state(vehicle_id: int | str) -> Endpoint:
    return Endpoint("GET", _vehicle_path(vehicle_id, "data_request/drive_state"))


def gui_settings(vehicle_id: int | str) -> Endpoint:
    return Endpoint("GET", _vehicle_path(vehicle_id, "data_request/gui_settings"))


def vehicle_state(vehicle_id: int | str) -> Endpoint:
    return Endpoint("GET", _vehicle_path(vehicle_id, "data_request/vehicle_state"))


def command(vehicle_id: int | str, cmd: VehicleCommand) -> Endpoint:
    """``wake_up`` sits directly under the vehicle; everything else under ``command/``."""
    return Endpoint("POST", _vehicle_path(vehicle_id, cmd.path))


def stream(vehicle_id: int | str, values: Sequence[str]) -> Endpoint:
    """Telemetry stream for *vehicle_id* (the streaming ``vehicle_id``, not ``id``)."""
    columns = quote(",".join(values), safe=",_")
    return Endpoint("GET", f"/stream/{vehicle_id}/?values={columns}", Host.STREAMING)
