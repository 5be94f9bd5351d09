"""Data models for Tesla API requests and responses."""

from pytesla.models._base import TeslaBaseModel
from pytesla.models.command import (
    ChargeLimitMaxRange,
    ChargeLimitPercentage,
    ChargeLimitStandard,
    FlashLights,
    HonkHorn,
    LockDoors,
    OpenChargeDoor,
    OpenTrunk,
    OpenTrunkOptions,
    ResetValetPin,
    RoofState,
    SetSunRoof,
    SetTemperature,
    StartAutoConditioning,
    StartCharging,
    StartVehicle,
    StopAutoConditioning,
    StopCharging,
    TrunkKind,
    UnlockDoors,
    ValetMode,
    VehicleCommand,
    WakeUp,
)
from pytesla.models.command_responses import CommandResponse
from pytesla.models.envelope import ErrorMessage, Response
from pytesla.models.states import (
    ChargeState,
    ClimateState,
    DriveState,
    GuiSettings,
    VehicleExtended,
    VehicleState,
)
from pytesla.models.stream import StreamEvent
from pytesla.models.token import AuthToken
from pytesla.models.vehicle import Vehicle

__all__ = [
    "AuthToken",
    "ChargeLimitMaxRange",
    "ChargeLimitPercentage",
    "ChargeLimitStandard",
    "ChargeState",
    "ClimateState",
    "CommandResponse",
    "DriveState",
    "ErrorMessage",
    "FlashLights",
    "GuiSettings",
    "HonkHorn",
    "LockDoors",
    "OpenChargeDoor",
    "OpenTrunk",
    "OpenTrunkOptions",
    "ResetValetPin",
    "Response",
    "RoofState",
    "SetSunRoof",
    "SetTemperature",
    "StartAutoConditioning",
    "StartCharging",
    "StartVehicle",
    "StopAutoConditioning",
    "StopCharging",
    "StreamEvent",
    "TeslaBaseModel",
    "TrunkKind",
    "UnlockDoors",
    "ValetMode",
    "Vehicle",
    "VehicleCommand",
    "VehicleExtended",
    "VehicleState",
    "WakeUp",
]
