from __future__ import annotations

import json
from typing import Any

import pytest

from pytesla._api.commands import build_command_request
from pytesla.exceptions import TeslaInvalidOptionsForCommandError
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

VEHICLE_ID = 321


@pytest.mark.parametrize(
    ("command", "path", "body"),
    [
        (WakeUp(), "wake_up", None),
        (
            ValetMode(valet_activated=True, pin="1234"),
            "command/set_valet_mode",
            {"valet_activated": True, "pin": "1234"},
        ),
        (ValetMode(valet_activated=False), "command/set_valet_mode", {"valet_activated": False}),
        (ResetValetPin(), "command/reset_valet_pin", None),
        (OpenChargeDoor(), "command/charge_port_door_open", None),
        (ChargeLimitStandard(), "command/charge_standard", None),
        (ChargeLimitMaxRange(), "command/charge_max_range", None),
        (ChargeLimitPercentage(limit=50), "command/set_charge_limit", {"percent": 50}),
        (StartCharging(), "command/charge_start", None),
        (StopCharging(), "command/charge_stop", None),
        (FlashLights(), "command/flash_lights", None),
        (HonkHorn(), "command/honk_horn", None),
        (UnlockDoors(), "command/door_unlock", None),
        (LockDoors(), "command/door_lock", None),
        (
            SetTemperature(driver_temperature=21.0, passenger_temperature=21.0),
            "command/set_temps",
            {"driver_temp": 21.0, "passenger_temp": 21.0},
        ),
        (StartAutoConditioning(), "command/auto_conditioning_start", None),
        (StopAutoConditioning(), "command/auto_conditioning_stop", None),
        (SetSunRoof(state=RoofState.VENT, percentage=15), "command/sun_roof_control", {"state": "vent", "percent": 15}),
        (StartVehicle(password="secret"), "command/remote_start_drive", {"password": "secret"}),
        (
            OpenTrunk(options=OpenTrunkOptions(which_trunk=TrunkKind.FRONT)),
            "command/trunk_open",
            {"which_trunk": "front"},
        ),
    ],
)
def test_command_requests(command: VehicleCommand, path: str, body: dict[str, Any] | None) -> None:
    endpoint, payload = build_command_request(VEHICLE_ID, command)
    assert endpoint.method == "POST"
    assert endpoint.path == f"/api/1/vehicles/{VEHICLE_ID}/{path}"
    assert payload == body


def test_every_command_variant_has_a_path() -> None:
    variants = VehicleCommand.__subclasses__()
    assert len(variants) == 19
    assert len({variant.path for variant in variants}) == 19


def test_empty_trunk_options_are_forwarded() -> None:
    _, payload = build_command_request(VEHICLE_ID, OpenTrunk(options=OpenTrunkOptions()))
    assert payload == {}


def test_out_of_range_values_are_not_validated_locally() -> None:
    _, payload = build_command_request(VEHICLE_ID, ChargeLimitPercentage(limit=5))
    assert payload == {"percent": 5}


def test_temperature_body_keeps_float_encoding() -> None:
    _, payload = build_command_request(VEHICLE_ID, SetTemperature(driver_temperature=21, passenger_temperature=19.5))
    assert json.dumps(payload, separators=(",", ":")) == '{"driver_temp":21.0,"passenger_temp":19.5}'


def test_non_command_is_rejected() -> None:
    with pytest.raises(TeslaInvalidOptionsForCommandError):
        build_command_request(VEHICLE_ID, "honk")  # type: ignore[arg-type]
