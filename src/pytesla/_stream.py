"""Telemetry streaming runtime.

The streaming host keeps a long-lived ``GET`` open and writes one CSV line per
sample. :class:`StreamingSession` turns that into either an async iterator of
:class:`StreamMessage` or a background task feeding a sink callback.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import NamedTuple

import aiohttp

from pytesla import _endpoints
from pytesla.config import TeslaConfig
from pytesla.exceptions import TeslaApiError, TeslaDecodeError, TeslaError, TeslaTransportError
from pytesla.models.stream import StreamEvent

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamTarget:
    """Handshake identity for one vehicle stream."""

    email: str
    vehicle_token: str
    vehicle_id: int | str


class StreamMessage(NamedTuple):
    """Exactly one of ``event`` / ``error`` is set."""

    event: StreamEvent | None
    error: TeslaError | None


StreamSink = Callable[[StreamEvent | None, TeslaError | None], None]


class StreamingSession:
    """One stream at a time over a shared :class:`aiohttp.ClientSession`.

    States: idle (no task), connecting/open (task running). Each
    :meth:`open` bumps a generation counter; deliveries from an older
    generation are dropped, so nothing reaches a sink once :meth:`close`
    has returned.
    """

    def __init__(self, config: TeslaConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._task: asyncio.Task[None] | None = None
        self._generation = 0

    @property
    def is_open(self) -> bool:
        """Whether a stream task is connecting or running."""
        return self._task is not None and not self._task.done()

    async def events(self, target: StreamTarget) -> AsyncIterator[StreamMessage]:
        """Yield one message per line until the connection ends.

        Undecodable lines yield ``StreamMessage(None, TeslaDecodeError)`` and
        the stream continues.

        Raises
        ------
        TeslaApiError
            The streaming host refused the connection.
        TeslaTransportError
            The connection failed or the server closed it.
        """
        values = self._config.stream_values
        endpoint = _endpoints.stream(target.vehicle_id, values)
        url = endpoint.url(self._config)
        auth = aiohttp.BasicAuth(target.email, target.vehicle_token)
        connect_timeout = self._config.request_timeout or None
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=connect_timeout)

        if self._config.debug_enabled:
            _logger.debug("Stream connecting %s vehicle_id=%s", url, target.vehicle_id)

        try:
            async with self._http.get(url, auth=auth, timeout=timeout) as resp:
                if not 200 <= resp.status < 300:
                    text = await resp.text()
                    raise TeslaApiError(
                        f"HTTP {resp.status} from {endpoint.path}: {text[:200]}",
                        status=resp.status,
                        endpoint=endpoint.path,
                    )
                _logger.debug("Stream open vehicle_id=%s", target.vehicle_id)
                async for raw_line in resp.content:
                    line = raw_line.decode("utf-8", errors="replace").strip()
                    if not line:
                        continue
                    if self._config.debug_enabled:
                        _logger.debug("Stream line %s", line)
                    try:
                        yield StreamMessage(StreamEvent.from_line(line, values), None)
                    except TeslaDecodeError as exc:
                        exc.endpoint = endpoint.path
                        yield StreamMessage(None, exc)
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TeslaTransportError(
                f"Stream {endpoint.path} failed: {exc!r}",
                endpoint=endpoint.path,
            ) from exc
        raise TeslaTransportError(f"Stream {endpoint.path} closed by server", endpoint=endpoint.path)

    def open(self, resolve_target: Callable[[], Awaitable[StreamTarget]], sink: StreamSink) -> None:
        """Start streaming in the background, feeding *sink*.

        *resolve_target* runs inside the task; a :class:`TeslaError` it
        raises is delivered to *sink* and no connection is made. Any
        previously open stream is closed first.
        """
        self.close()
        self._generation += 1
        generation = self._generation
        self._task = asyncio.get_running_loop().create_task(self._run(resolve_target, sink, generation))

    def close(self) -> None:
        """Stop delivery immediately and cancel the connection. Idempotent."""
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            _logger.debug("Stream close requested")
            task.cancel()

    async def aclose(self) -> None:
        """Like :meth:`close`, then wait for the connection to be released."""
        task = self._task
        self.close()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _deliver(self, generation: int, sink: StreamSink, event: StreamEvent | None, error: TeslaError | None) -> None:
        if generation != self._generation:
            return
        try:
            sink(event, error)
        except Exception:
            _logger.warning("Stream sink raised", exc_info=True)

    async def _run(
        self,
        resolve_target: Callable[[], Awaitable[StreamTarget]],
        sink: StreamSink,
        generation: int,
    ) -> None:
        try:
            target = await resolve_target()
            async with contextlib.aclosing(self.events(target)) as messages:
                async for message in messages:
                    if generation != self._generation:
                        return
                    self._deliver(generation, sink, message.event, message.error)
        except TeslaError as exc:
            _logger.debug("Stream ended: %s", exc)
            self._deliver(generation, sink, None, exc)
        except Exception as exc:
            _logger.debug("Stream failed", exc_info=True)
            self._deliver(generation, sink, None, TeslaTransportError(f"Stream failed: {exc!r}"))
        finally:
            if generation == self._generation:
                self._task = None
