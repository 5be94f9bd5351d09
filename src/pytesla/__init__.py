"""pytesla - Async Python client for the Tesla owner API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytesla")
except PackageNotFoundError:
    __version__ = "0+local"
from pytesla._stream import StreamMessage
from pytesla.client import TeslaClient
from pytesla.config import TeslaConfig
from pytesla.exceptions import (
    TeslaApiError,
    TeslaAuthenticationError,
    TeslaAuthenticationFailedError,
    TeslaAuthenticationRequiredError,
    TeslaConfigError,
    TeslaDecodeError,
    TeslaError,
    TeslaInvalidOptionsForCommandError,
    TeslaStreamingCredentialsMissingError,
    TeslaTransportError,
)
from pytesla.models import (
    AuthToken,
    ChargeLimitMaxRange,
    ChargeLimitPercentage,
    ChargeLimitStandard,
    ChargeState,
    ClimateState,
    CommandResponse,
    DriveState,
    ErrorMessage,
    FlashLights,
    GuiSettings,
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
    StreamEvent,
    TrunkKind,
    UnlockDoors,
    ValetMode,
    Vehicle,
    VehicleCommand,
    VehicleExtended,
    VehicleState,
    WakeUp,
)

__all__ = [
    "__version__",
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
    "RoofState",
    "SetSunRoof",
    "SetTemperature",
    "StartAutoConditioning",
    "StartCharging",
    "StartVehicle",
    "StopAutoConditioning",
    "StopCharging",
    "StreamEvent",
    "StreamMessage",
    "TeslaApiError",
    "TeslaAuthenticationError",
    "TeslaAuthenticationFailedError",
    "TeslaAuthenticationRequiredError",
    "TeslaClient",
    "TeslaConfig",
    "TeslaConfigError",
    "TeslaDecodeError",
    "TeslaError",
    "TeslaInvalidOptionsForCommandError",
    "TeslaStreamingCredentialsMissingError",
    "TeslaTransportError",
    "TrunkKind",
    "UnlockDoors",
    "ValetMode",
    "Vehicle",
    "VehicleCommand",
    "VehicleExtended",
    "VehicleState",
    "WakeUp",
]
