"""Command dispatch: :class:`VehicleCommand` -> endpoint + optional body."""

from __future__ import annotations

from typing import Any

from pytesla import _endpoints
from pytesla._endpoints import Endpoint
from pytesla.exceptions import TeslaInvalidOptionsForCommandError
from pytesla.models.command import VehicleCommand


def build_command_request(vehicle_id: int | str, command: VehicleCommand) -> tuple[Endpoint, dict[str, Any] | None]:
    """Return the endpoint and JSON body for *command* on *vehicle_id*.

    Values are forwarded as constructed; the API decides whether, say, a
    charge limit of 10% is acceptable.
    """
    if not isinstance(command, VehicleCommand):
        raise TeslaInvalidOptionsForCommandError(f"Not a vehicle command: {command!r}")
    return _endpoints.command(vehicle_id, command), command.to_body()
