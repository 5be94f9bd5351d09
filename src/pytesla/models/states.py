"""Vehicle state records returned by the ``data_request`` endpoints.

Only the commonly used fields are declared; everything else the API returns
is available through ``raw``.
"""

from __future__ import annotations

from pytesla.models._base import TeslaBaseModel
from pytesla.models.vehicle import Vehicle


class ChargeState(TeslaBaseModel):
    """Battery and charger status."""

    battery_level: int | None = None
    battery_range: float | None = None
    est_battery_range: float | None = None
    charge_limit_soc: int | None = None
    charging_state: str | None = None
    charge_port_door_open: bool | None = None
    charger_power: float | None = None
    charger_voltage: int | None = None
    charger_actual_current: int | None = None
    charge_rate: float | None = None
    time_to_full_charge: float | None = None
    timestamp: int | None = None


class ClimateState(TeslaBaseModel):
    """Cabin climate status. Temperatures are in °C."""

    inside_temp: float | None = None
    outside_temp: float | None = None
    driver_temp_setting: float | None = None
    passenger_temp_setting: float | None = None
    is_climate_on: bool | None = None
    is_auto_conditioning_on: bool | None = None
    is_front_defroster_on: bool | None = None
    is_rear_defroster_on: bool | None = None
    fan_status: int | None = None
    timestamp: int | None = None


class DriveState(TeslaBaseModel):
    """Position and motion."""

    latitude: float | None = None
    longitude: float | None = None
    heading: int | None = None
    speed: float | None = None
    power: float | None = None
    shift_state: str | None = None
    gps_as_of: int | None = None
    timestamp: int | None = None


class GuiSettings(TeslaBaseModel):
    """Display preferences configured in the car."""

    gui_distance_units: str | None = None
    gui_temperature_units: str | None = None
    gui_charge_rate_units: str | None = None
    gui_24_hour_time: bool | None = None
    gui_range_display: str | None = None
    timestamp: int | None = None


class VehicleState(TeslaBaseModel):
    """Doors, locks, software and valet status."""

    locked: bool | None = None
    odometer: float | None = None
    car_version: str | None = None
    vehicle_name: str | None = None
    valet_mode: bool | None = None
    valet_pin_needed: bool | None = None
    remote_start: bool | None = None
    sun_roof_state: str | None = None
    sun_roof_percent_open: int | None = None
    df: int | None = None
    dr: int | None = None
    pf: int | None = None
    pr: int | None = None
    ft: int | None = None
    rt: int | None = None
    timestamp: int | None = None


class VehicleExtended(Vehicle):
    """Vehicle record with every state section, from ``vehicle_data``."""

    charge_state: ChargeState | None = None
    climate_state: ClimateState | None = None
    drive_state: DriveState | None = None
    gui_settings: GuiSettings | None = None
    vehicle_state: VehicleState | None = None
