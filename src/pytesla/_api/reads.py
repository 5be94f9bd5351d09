"""Read operations: one table row per resource.

Every read is ``GET`` on a vehicle scoped endpoint whose body is the
``{"response": ...}`` envelope around the resource.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Callable
from typing import Any

from pytesla import _endpoints
from pytesla._endpoints import Endpoint
from pytesla.models.envelope import Response
from pytesla.models.states import (
    ChargeState,
    ClimateState,
    DriveState,
    GuiSettings,
    VehicleExtended,
    VehicleState,
)


class ReadOperation(enum.Enum):
    ALL_STATES = "all_states"
    MOBILE_ACCESS = "mobile_access"
    CHARGE_STATE = "charge_state"
    CLIMATE_STATE = "climate_state"
    DRIVE_STATE = "drive_state"
    GUI_SETTINGS = "gui_settings"
    VEHICLE_STATE = "vehicle_state"


@dataclasses.dataclass(frozen=True)
class ReadRoute:
    endpoint: Callable[[int | str], Endpoint]
    envelope: Any


READS: dict[ReadOperation, ReadRoute] = {
    ReadOperation.ALL_STATES: ReadRoute(_endpoints.all_states, Response[VehicleExtended]),
    ReadOperation.MOBILE_ACCESS: ReadRoute(_endpoints.mobile_access, Response[bool]),
    ReadOperation.CHARGE_STATE: ReadRoute(_endpoints.charge_state, Response[ChargeState]),
    ReadOperation.CLIMATE_STATE: ReadRoute(_endpoints.climate_state, Response[ClimateState]),
    ReadOperation.DRIVE_STATE: ReadRoute(_endpoints.drive_state, Response[DriveState]),
    ReadOperation.GUI_SETTINGS: ReadRoute(_endpoints.gui_settings, Response[GuiSettings]),
    ReadOperation.VEHICLE_STATE: ReadRoute(_endpoints.vehicle_state, Response[VehicleState]),
}
