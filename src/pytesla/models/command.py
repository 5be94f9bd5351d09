"""Vehicle command variants.

Each remote command is its own frozen model carrying exactly the fields its
endpoint needs. The class-level ``path`` names the endpoint below
``/api/1/vehicles/{id}/``; :meth:`VehicleCommand.to_body` encodes the JSON
body using the API's key names, or returns ``None`` for commands sent
without a body.

Values are type checked but not range checked: the API is authoritative on
what a valid charge limit or temperature is.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class RoofState(enum.StrEnum):
    """Panoramic sunroof positions accepted by ``sun_roof_control``."""

    OPEN = "open"
    CLOSE = "close"
    COMFORT = "comfort"
    VENT = "vent"
    MOVE = "move"


class TrunkKind(enum.StrEnum):
    REAR = "rear"
    FRONT = "front"


class OpenTrunkOptions(BaseModel):
    """Options for ``trunk_open``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    which_trunk: TrunkKind | None = None


class VehicleCommand(BaseModel):
    """Base class for all commands."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    path: ClassVar[str]
    has_body: ClassVar[bool] = False

    def to_body(self) -> dict[str, Any] | None:
        """Return the JSON body for this command, or ``None``."""
        if not self.has_body:
            return None
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ------------------------------------------------------------------
# Commands without a body
# ------------------------------------------------------------------


class WakeUp(VehicleCommand):
    """Wake a sleeping vehicle. The only command outside ``command/``."""

    path: ClassVar[str] = "wake_up"


class ResetValetPin(VehicleCommand):
    path: ClassVar[str] = "command/reset_valet_pin"


class OpenChargeDoor(VehicleCommand):
    path: ClassVar[str] = "command/charge_port_door_open"


class ChargeLimitStandard(VehicleCommand):
    path: ClassVar[str] = "command/charge_standard"


class ChargeLimitMaxRange(VehicleCommand):
    path: ClassVar[str] = "command/charge_max_range"


class StartCharging(VehicleCommand):
    path: ClassVar[str] = "command/charge_start"


class StopCharging(VehicleCommand):
    path: ClassVar[str] = "command/charge_stop"


class FlashLights(VehicleCommand):
    path: ClassVar[str] = "command/flash_lights"


class HonkHorn(VehicleCommand):
    path: ClassVar[str] = "command/honk_horn"


class UnlockDoors(VehicleCommand):
    path: ClassVar[str] = "command/door_unlock"


class LockDoors(VehicleCommand):
    path: ClassVar[str] = "command/door_lock"


class StartAutoConditioning(VehicleCommand):
    path: ClassVar[str] = "command/auto_conditioning_start"


class StopAutoConditioning(VehicleCommand):
    path: ClassVar[str] = "command/auto_conditioning_stop"


# ------------------------------------------------------------------
# Commands with a body
# ------------------------------------------------------------------


class ValetMode(VehicleCommand):
    """Enable or disable valet mode, optionally with a 4-digit PIN."""

    path: ClassVar[str] = "command/set_valet_mode"
    has_body: ClassVar[bool] = True

    valet_activated: bool
    pin: str | None = None


class ChargeLimitPercentage(VehicleCommand):
    path: ClassVar[str] = "command/set_charge_limit"
    has_body: ClassVar[bool] = True

    limit: int = Field(serialization_alias="percent")


class SetTemperature(VehicleCommand):
    """Set driver and passenger setpoints in °C."""

    path: ClassVar[str] = "command/set_temps"
    has_body: ClassVar[bool] = True

    driver_temperature: float = Field(serialization_alias="driver_temp")
    passenger_temperature: float = Field(serialization_alias="passenger_temp")


class SetSunRoof(VehicleCommand):
    path: ClassVar[str] = "command/sun_roof_control"
    has_body: ClassVar[bool] = True

    state: RoofState
    percentage: int = Field(serialization_alias="percent")


class StartVehicle(VehicleCommand):
    """Keyless driving; requires the account password."""

    path: ClassVar[str] = "command/remote_start_drive"
    has_body: ClassVar[bool] = True

    password: str


class OpenTrunk(VehicleCommand):
    path: ClassVar[str] = "command/trunk_open"
    has_body: ClassVar[bool] = True

    options: OpenTrunkOptions

    def to_body(self) -> dict[str, Any] | None:
        # The options struct is the body; empty options are sent as ``{}``.
        return self.options.model_dump(exclude_none=True, mode="json")
