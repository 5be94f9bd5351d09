"""High-level async client for the Tesla owner API."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from typing import Any

import aiohttp

from pytesla import _endpoints
from pytesla._api.commands import build_command_request
from pytesla._api.login import request_token
from pytesla._api.reads import READS, ReadOperation
from pytesla._stream import StreamingSession, StreamMessage, StreamSink, StreamTarget
from pytesla._transport import HttpTransport
from pytesla.config import TeslaConfig
from pytesla.exceptions import (
    TeslaAuthenticationRequiredError,
    TeslaError,
    TeslaInvalidOptionsForCommandError,
    TeslaStreamingCredentialsMissingError,
)
from pytesla.models.command import VehicleCommand
from pytesla.models.command_responses import CommandResponse
from pytesla.models.envelope import Response
from pytesla.models.states import (
    ChargeState,
    ClimateState,
    DriveState,
    GuiSettings,
    VehicleExtended,
    VehicleState,
)
from pytesla.models.token import AuthToken
from pytesla.models.vehicle import Vehicle
from pytesla.session import Credentials, TokenStore

_logger = logging.getLogger(__name__)


def _vehicle_id(vehicle: Vehicle) -> int:
    if vehicle.id is None:
        raise TeslaInvalidOptionsForCommandError("Vehicle has no id; fetch it with get_vehicles()")
    return vehicle.id


class TeslaClient:
    """Async client for the Tesla owner API.

    Usage::

        async with TeslaClient() as client:
            await client.authenticate(email, password)
            vehicles = await client.get_vehicles()

    The client remembers the email and password passed to
    :meth:`authenticate` so an expired token is replaced transparently on
    the next call. Nothing is persisted; to skip the password exchange on
    a later run, hand a saved :class:`AuthToken` to :meth:`reuse`.
    """

    def __init__(
        self,
        config: TeslaConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or TeslaConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None
        self._streaming: StreamingSession | None = None
        self._tokens = TokenStore()
        self._credentials: Credentials | None = None
        self._email: str | None = None
        self._auth_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TeslaClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        self._streaming = StreamingSession(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._streaming is not None:
            await self._streaming.aclose()
            self._streaming = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def config(self) -> TeslaConfig:
        return self._config

    @property
    def token(self) -> AuthToken | None:
        """Current token, valid or not."""
        return self._tokens.current()

    @property
    def email(self) -> str | None:
        """Email remembered from :meth:`authenticate` or :meth:`reuse`; needed for streaming."""
        return self._email

    @property
    def is_authenticated(self) -> bool:
        return self._tokens.current() is not None

    async def authenticate(self, email: str, password: str) -> AuthToken:
        """Exchange email and password for a token and remember them.

        Raises
        ------
        TeslaAuthenticationFailedError
            The credentials were rejected (HTTP 401).
        TeslaApiError, TeslaDecodeError, TeslaTransportError
            Any other failure.
        """
        credentials = Credentials(email=email, password=password)
        self._email = email
        self._credentials = credentials
        token = await request_token(self._config, self._require_transport(), credentials)
        self._tokens.replace(token)
        return token

    def reuse(self, token: AuthToken, email: str | None = None) -> None:
        """Adopt a previously issued token without contacting the server.

        An invalid token is only discovered by the next call. *email* is
        required for streaming.
        """
        self._tokens.replace(token)
        self._email = email

    def logout(self) -> None:
        """Forget email, password and token. Idempotent."""
        self._email = None
        self._credentials = None
        self._tokens.clear()

    async def ensure_authenticated(self) -> AuthToken:
        """Return a valid token, re-authenticating once if needed.

        Concurrent callers share a single re-authentication.

        Raises
        ------
        TeslaAuthenticationRequiredError
            No valid token and no remembered credentials. No request is made.
        """
        if self._tokens.is_valid():
            token = self._tokens.current()
            if token is not None:
                return token

        async with self._auth_lock:
            token = self._tokens.current()
            if token is not None and token.is_valid:
                return token
            self._tokens.clear()
            credentials = self._credentials
            if credentials is None:
                raise TeslaAuthenticationRequiredError("No valid token and no stored credentials")
            _logger.debug("Token missing or expired, re-authenticating")
            return await self.authenticate(credentials.email, credentials.password)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise TeslaError("Client not initialized. Use 'async with TeslaClient(...) as client:'")
        return self._transport

    def _require_streaming(self) -> StreamingSession:
        if self._streaming is None:
            raise TeslaError("Client not initialized. Use 'async with TeslaClient(...) as client:'")
        return self._streaming

    async def _read(self, operation: ReadOperation, vehicle: Vehicle) -> Any:
        read = READS[operation]
        endpoint = read.endpoint(_vehicle_id(vehicle))
        token = await self.ensure_authenticated()
        envelope = await self._require_transport().execute(
            endpoint,
            result_type=read.envelope,
            token=token.access_token,
        )
        return envelope.response

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_vehicles(self) -> list[Vehicle]:
        """Fetch all vehicles on the account, including undelivered ones."""
        token = await self.ensure_authenticated()
        envelope: Response[list[Vehicle]] = await self._require_transport().execute(
            _endpoints.vehicles(),
            result_type=Response[list[Vehicle]],
            token=token.access_token,
        )
        return envelope.response

    async def get_all_data(self, vehicle: Vehicle) -> VehicleExtended:
        return await self._read(ReadOperation.ALL_STATES, vehicle)

    async def get_vehicle_mobile_access_state(self, vehicle: Vehicle) -> bool:
        return await self._read(ReadOperation.MOBILE_ACCESS, vehicle)

    async def get_vehicle_charge_state(self, vehicle: Vehicle) -> ChargeState:
        return await self._read(ReadOperation.CHARGE_STATE, vehicle)

    async def get_vehicle_climate_state(self, vehicle: Vehicle) -> ClimateState:
        return await self._read(ReadOperation.CLIMATE_STATE, vehicle)

    async def get_vehicle_drive_state(self, vehicle: Vehicle) -> DriveState:
        return await self._read(ReadOperation.DRIVE_STATE, vehicle)

    async def get_vehicle_gui_settings(self, vehicle: Vehicle) -> GuiSettings:
        return await self._read(ReadOperation.GUI_SETTINGS, vehicle)

    async def get_vehicle_state(self, vehicle: Vehicle) -> VehicleState:
        return await self._read(ReadOperation.VEHICLE_STATE, vehicle)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def send_command(self, vehicle: Vehicle, command: VehicleCommand) -> CommandResponse:
        """Send *command* to *vehicle*. Failures are not retried."""
        endpoint, body = build_command_request(_vehicle_id(vehicle), command)
        token = await self.ensure_authenticated()
        _logger.debug("Sending %s to vehicle id=%s", type(command).__name__, vehicle.id)
        envelope: Response[CommandResponse] = await self._require_transport().execute(
            endpoint,
            result_type=Response[CommandResponse],
            body=body,
            token=token.access_token,
        )
        return envelope.response

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    async def reload_vehicle(self, vehicle: Vehicle) -> Vehicle:
        """Fresh snapshot of *vehicle*, or *vehicle* itself when no longer listed."""
        for fresh in await self.get_vehicles():
            if fresh.vehicle_id == vehicle.vehicle_id:
                return fresh
        _logger.debug("Vehicle vehicle_id=%s not in vehicle list, keeping snapshot", vehicle.vehicle_id)
        return vehicle

    async def _resolve_stream_target(self, vehicle: Vehicle, reloads_vehicle: bool) -> StreamTarget:
        if reloads_vehicle:
            vehicle = await self.reload_vehicle(vehicle)
        email = self._email
        vehicle_token = vehicle.streaming_token
        if not email or not vehicle_token or vehicle.vehicle_id is None:
            raise TeslaStreamingCredentialsMissingError("Streaming needs an email and a vehicle streaming token")
        return StreamTarget(email=email, vehicle_token=vehicle_token, vehicle_id=vehicle.vehicle_id)

    def open_stream(self, vehicle: Vehicle, sink: StreamSink, *, reloads_vehicle: bool = True) -> None:
        """Stream telemetry for *vehicle* into ``sink(event, error)``.

        Returns immediately; *sink* is called once per received line, in
        order. Errors that end the stream (vehicle reload failure, missing
        streaming credentials, refused or dropped connection) are delivered
        once as ``sink(None, error)``. There is no reconnect. Opening a new
        stream closes the previous one.

        Parameters
        ----------
        vehicle : Vehicle
            Vehicle to stream.
        sink : callable
            Receives ``(StreamEvent, None)`` or ``(None, TeslaError)``.
        reloads_vehicle : bool
            Refresh the vehicle first; cached snapshots may hold an expired
            streaming token.
        """
        self._require_streaming().open(lambda: self._resolve_stream_target(vehicle, reloads_vehicle), sink)

    def close_stream(self) -> None:
        """Stop the current stream. No sink call happens after this returns."""
        if self._streaming is not None:
            self._streaming.close()

    async def stream_events(self, vehicle: Vehicle, *, reloads_vehicle: bool = True) -> AsyncIterator[StreamMessage]:
        """Iterate over telemetry for *vehicle*; break out of the loop to stop.

        Terminal errors are raised rather than yielded.
        """
        streaming = self._require_streaming()
        target = await self._resolve_stream_target(vehicle, reloads_vehicle)
        async with contextlib.aclosing(streaming.events(target)) as messages:
            async for message in messages:
                yield message
