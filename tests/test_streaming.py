from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from pytesla._constants import STREAM_VALUES
from pytesla.client import TeslaClient
from pytesla.config import TeslaConfig
from pytesla.exceptions import (
    TeslaApiError,
    TeslaDecodeError,
    TeslaError,
    TeslaStreamingCredentialsMissingError,
    TeslaTransportError,
)
from pytesla.models.stream import StreamEvent
from pytesla.models.token import AuthToken
from pytesla.models.vehicle import Vehicle

EMAIL = "user@example.com"


def _line(timestamp_ms: int, speed: int | str = 30) -> bytes:
    return f"{timestamp_ms},{speed},1000.5,80,10,180,37.1,-122.1,5,D,200,190,181\n".encode()


def _vehicle(tokens: list[str] | None = None, vehicle_id: int = 22) -> Vehicle:
    return Vehicle.model_validate({"id": 11, "vehicle_id": vehicle_id, "tokens": ["s1"] if tokens is None else tokens})


class FakeStreamingHost:
    """Owner API vehicle list plus the CSV streaming endpoint on one server."""

    def __init__(
        self,
        lines: list[bytes] | None = None,
        *,
        vehicles: list[dict[str, Any]] | None = None,
        vehicles_status: int = 200,
        stream_status: int = 200,
        keep_open: bool = False,
    ) -> None:
        self.lines = lines or []
        self.vehicles = vehicles if vehicles is not None else [{"id": 11, "vehicle_id": 22, "tokens": ["s1"]}]
        self.vehicles_status = vehicles_status
        self.stream_status = stream_status
        self.keep_open = keep_open
        self.stream_requests: list[web.Request] = []

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/1/vehicles", self._vehicles)
        app.router.add_get("/stream/{vehicle_id}/", self._stream)
        return app

    async def _vehicles(self, _request: web.Request) -> web.Response:
        if self.vehicles_status != 200:
            return web.json_response({"error": "boom"}, status=self.vehicles_status)
        return web.json_response({"response": self.vehicles, "count": len(self.vehicles)})

    async def _stream(self, request: web.Request) -> web.StreamResponse:
        self.stream_requests.append(request)
        if self.stream_status != 200:
            return web.Response(status=self.stream_status, text="can't validate password")
        resp = web.StreamResponse()
        await resp.prepare(request)
        try:
            for line in self.lines:
                await resp.write(line)
            if self.keep_open:
                for n in range(200):
                    await asyncio.sleep(0.02)
                    await resp.write(_line(1700000001000 + n))
        except ConnectionResetError:
            return resp
        await resp.write_eof()
        return resp


def _config(server: TestServer) -> TeslaConfig:
    url = f"http://{server.host}:{server.port}"
    return TeslaConfig(use_mock_server=True, mock_base_url=url, mock_streaming_base_url=url)


async def _until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    async def poll() -> None:
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(poll(), timeout)


def _collector() -> tuple[list[tuple[StreamEvent | None, TeslaError | None]], Callable[..., None]]:
    received: list[tuple[StreamEvent | None, TeslaError | None]] = []

    def sink(event: StreamEvent | None, error: TeslaError | None) -> None:
        received.append((event, error))

    return received, sink


def _authenticated(client: TeslaClient, email: str | None = EMAIL) -> None:
    client.reuse(AuthToken(access_token="abc", expires_in=3600), email=email)


@pytest.mark.asyncio
async def test_events_arrive_in_order_then_one_terminal_error() -> None:
    host = FakeStreamingHost([_line(1700000000000, 10), b"garbage\n", b"\n", _line(1700000000500, 20)])
    received, sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(), sink)
        await _until(lambda: any(isinstance(err, TeslaTransportError) for _evt, err in received))
        await asyncio.sleep(0.05)

    assert len(received) == 4
    first, bad, second, end = received
    assert first[1] is None and first[0] is not None
    assert first[0].speed == 10
    assert first[0].timestamp == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
    assert bad[0] is None and isinstance(bad[1], TeslaDecodeError)
    assert second[0] is not None and second[0].speed == 20
    assert end[0] is None and isinstance(end[1], TeslaTransportError)


@pytest.mark.asyncio
async def test_handshake_uses_basic_auth_and_requested_columns() -> None:
    host = FakeStreamingHost([_line(1700000000000)])
    received, sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(), sink)
        await _until(lambda: any(err is not None for _evt, err in received))

    request = host.stream_requests[0]
    assert request.match_info["vehicle_id"] == "22"
    assert request.headers["Authorization"] == aiohttp.BasicAuth(EMAIL, "s1").encode()
    assert request.query["values"] == ",".join(STREAM_VALUES)


@pytest.mark.asyncio
async def test_reloaded_vehicle_supplies_fresh_streaming_token() -> None:
    host = FakeStreamingHost(vehicles=[{"id": 11, "vehicle_id": 22, "tokens": ["fresh"]}])
    received, sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(tokens=["stale"]), sink)
        await _until(lambda: bool(received))

    assert host.stream_requests[0].headers["Authorization"] == aiohttp.BasicAuth(EMAIL, "fresh").encode()


@pytest.mark.asyncio
async def test_vehicle_missing_from_reload_falls_back_to_snapshot() -> None:
    host = FakeStreamingHost(vehicles=[{"id": 99, "vehicle_id": 98, "tokens": ["other"]}])
    received, sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(tokens=["snapshot"]), sink)
        await _until(lambda: bool(received))

    request = host.stream_requests[0]
    assert request.match_info["vehicle_id"] == "22"
    assert request.headers["Authorization"] == aiohttp.BasicAuth(EMAIL, "snapshot").encode()


@pytest.mark.asyncio
async def test_reload_failure_is_delivered_without_connecting() -> None:
    host = FakeStreamingHost(vehicles_status=500)
    received, sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(), sink)
        await _until(lambda: bool(received))
        await asyncio.sleep(0.05)

    assert len(received) == 1
    event, error = received[0]
    assert event is None
    assert isinstance(error, TeslaApiError)
    assert error.status == 500
    assert host.stream_requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tokens", "email"),
    [([], EMAIL), (["s1"], None)],
    ids=["no-streaming-token", "no-email"],
)
async def test_missing_streaming_credentials_reported_once(tokens: list[str], email: str | None) -> None:
    host = FakeStreamingHost()
    received, sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client, email=email)
        client.open_stream(_vehicle(tokens=tokens), sink, reloads_vehicle=False)
        await _until(lambda: bool(received))
        await asyncio.sleep(0.05)

    assert len(received) == 1
    assert received[0][0] is None
    assert isinstance(received[0][1], TeslaStreamingCredentialsMissingError)
    assert host.stream_requests == []


@pytest.mark.asyncio
async def test_refused_handshake_is_api_error() -> None:
    host = FakeStreamingHost(stream_status=401)
    received, sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(), sink, reloads_vehicle=False)
        await _until(lambda: bool(received))
        await asyncio.sleep(0.05)

    assert len(received) == 1
    assert isinstance(received[0][1], TeslaApiError)
    assert received[0][1].status == 401


@pytest.mark.asyncio
async def test_close_stream_stops_delivery() -> None:
    host = FakeStreamingHost([_line(1700000000000)], keep_open=True)
    received: list[tuple[StreamEvent | None, TeslaError | None]] = []

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)

        def sink(event: StreamEvent | None, error: TeslaError | None) -> None:
            received.append((event, error))
            if len(received) == 3:
                client.close_stream()

        client.open_stream(_vehicle(), sink, reloads_vehicle=False)
        await _until(lambda: len(received) >= 3)
        await asyncio.sleep(0.15)

        assert len(received) == 3
        assert all(err is None for _evt, err in received)
        client.close_stream()


@pytest.mark.asyncio
async def test_close_stream_when_idle_is_noop() -> None:
    client = TeslaClient()
    client.close_stream()
    async with client:
        client.close_stream()
        client.close_stream()


@pytest.mark.asyncio
async def test_opening_new_stream_replaces_previous() -> None:
    host = FakeStreamingHost([_line(1700000000000)], keep_open=True)
    first, first_sink = _collector()
    second, second_sink = _collector()

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(), first_sink, reloads_vehicle=False)
        await _until(lambda: bool(first))
        client.open_stream(_vehicle(), second_sink, reloads_vehicle=False)
        count_at_switch = len(first)
        await _until(lambda: len(second) >= 2)
        client.close_stream()

    assert len(first) == count_at_switch
    assert len(host.stream_requests) == 2


@pytest.mark.asyncio
async def test_failing_sink_does_not_stop_stream(caplog: pytest.LogCaptureFixture) -> None:
    host = FakeStreamingHost([_line(1700000000000, 1), _line(1700000000100, 2)])
    received: list[tuple[StreamEvent | None, TeslaError | None]] = []

    def sink(event: StreamEvent | None, error: TeslaError | None) -> None:
        received.append((event, error))
        if event is not None and event.speed == 1:
            raise RuntimeError("consumer bug")

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        client.open_stream(_vehicle(), sink, reloads_vehicle=False)
        await _until(lambda: any(err is not None for _evt, err in received))

    assert [evt.speed for evt, _err in received if evt is not None] == [1, 2]
    assert "Stream sink raised" in caplog.text


@pytest.mark.asyncio
async def test_stream_events_iterates_and_stops_on_break() -> None:
    host = FakeStreamingHost([_line(1700000000000, 1), _line(1700000000100, 2)], keep_open=True)

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        speeds = []
        async for message in client.stream_events(_vehicle(), reloads_vehicle=False):
            assert message.error is None
            assert message.event is not None
            speeds.append(message.event.speed)
            if len(speeds) == 2:
                break

    assert speeds == [1, 2]


@pytest.mark.asyncio
async def test_stream_events_raises_when_server_closes() -> None:
    host = FakeStreamingHost([_line(1700000000000)])
    messages = []

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        with pytest.raises(TeslaTransportError, match="closed by server"):
            async for message in client.stream_events(_vehicle(), reloads_vehicle=False):
                messages.append(message)

    assert len(messages) == 1


@pytest.mark.asyncio
async def test_out_of_range_timestamp_does_not_end_stream() -> None:
    out_of_range = ("99999999999999999999999" + "," * len(STREAM_VALUES) + "\n").encode()
    host = FakeStreamingHost([out_of_range, _line(1700000000000, 7)])
    messages = []

    async with TestServer(host.app()) as server, TeslaClient(_config(server)) as client:
        _authenticated(client)
        with pytest.raises(TeslaTransportError, match="closed by server"):
            async for message in client.stream_events(_vehicle(), reloads_vehicle=False):
                messages.append(message)

    assert len(messages) == 2
    assert messages[0].event is None
    assert isinstance(messages[0].error, TeslaDecodeError)
    assert messages[1].event is not None
    assert messages[1].event.speed == 7


@pytest.mark.asyncio
async def test_stream_events_without_credentials_raises() -> None:
    async with TeslaClient() as client:
        _authenticated(client, email=None)
        with pytest.raises(TeslaStreamingCredentialsMissingError):
            async for _message in client.stream_events(_vehicle(), reloads_vehicle=False):
                pass
