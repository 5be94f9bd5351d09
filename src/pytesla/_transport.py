"""HTTP request execution and response classification."""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError

from pytesla._constants import USER_AGENT
from pytesla._endpoints import Endpoint
from pytesla._redact import redact_for_log
from pytesla.config import TeslaConfig
from pytesla.exceptions import TeslaApiError, TeslaDecodeError, TeslaTransportError
from pytesla.models.envelope import ErrorMessage

_logger = logging.getLogger(__name__)

RequestBody = BaseModel | Mapping[str, Any]


class Transport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def execute(
        self,
        endpoint: Endpoint,
        *,
        result_type: Any,
        body: RequestBody | None = None,
        token: str | None = None,
    ) -> Any:
        ...


@functools.lru_cache(maxsize=64)
def _adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def serialize_body(body: RequestBody) -> dict[str, Any]:
    """Encode a request body using the API's key names."""
    if isinstance(body, BaseModel):
        return body.model_dump(by_alias=True, exclude_none=True, mode="json")
    return dict(body)


def _parse_error_message(raw_body: bytes) -> ErrorMessage | None:
    if not raw_body.strip():
        return None
    try:
        parsed = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(parsed, dict) or not ({"error", "error_description"} & parsed.keys()):
        return None
    try:
        return ErrorMessage.model_validate(parsed)
    except ValidationError:
        return None


def _loggable(raw_body: bytes) -> Any:
    text = raw_body.decode("utf-8", errors="replace")
    try:
        return redact_for_log(json.loads(text))
    except json.JSONDecodeError:
        return redact_for_log(text)


class HttpTransport:
    """Executes endpoints over an :class:`aiohttp.ClientSession`.

    Every call ends in exactly one of: the decoded result,
    :class:`TeslaDecodeError`, :class:`TeslaApiError` or
    :class:`TeslaTransportError`. Nothing is retried here.
    """

    def __init__(self, config: TeslaConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _timeout(self) -> aiohttp.ClientTimeout | None:
        if self._config.request_timeout > 0:
            return aiohttp.ClientTimeout(total=self._config.request_timeout)
        return None

    async def execute(
        self,
        endpoint: Endpoint,
        *,
        result_type: Any,
        body: RequestBody | None = None,
        token: str | None = None,
    ) -> Any:
        """Perform *endpoint* and decode a 2xx body as *result_type*.

        Parameters
        ----------
        endpoint : Endpoint
            What to call.
        result_type : type
            Anything pydantic can validate into, usually ``Response[Model]``.
        body : BaseModel or Mapping, optional
            JSON body. Models are dumped by alias.
        token : str, optional
            Access token for the ``Authorization`` header.

        Raises
        ------
        TeslaTransportError
            The request did not complete.
        TeslaApiError
            Non-2xx status.
        TeslaDecodeError
            2xx status with a missing or mismatched body.
        """
        url = endpoint.url(self._config)
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        data: str | None = None
        payload: dict[str, Any] | None = None
        if body is not None:
            payload = serialize_body(body)
            data = json.dumps(payload, separators=(",", ":"))
            headers["content-type"] = "application/json"

        debug = self._config.debug_enabled
        if debug:
            _logger.debug(
                "Request %s %s headers=%s body=%s",
                endpoint.method,
                url,
                redact_for_log(headers),
                redact_for_log(payload),
            )

        try:
            async with self._http.request(
                endpoint.method,
                url,
                data=data,
                headers=headers,
                timeout=self._timeout(),
            ) as resp:
                status = resp.status
                raw_body = await resp.read()
                if debug:
                    _logger.debug(
                        "Response %s %s status=%s headers=%s body=%s",
                        endpoint.method,
                        url,
                        status,
                        redact_for_log(dict(resp.headers)),
                        _loggable(raw_body),
                    )
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TeslaTransportError(
                f"Request to {endpoint.path} failed: {exc!r}",
                endpoint=endpoint.path,
            ) from exc

        if 200 <= status < 300:
            return self._decode(endpoint, raw_body, result_type)

        server_message = _parse_error_message(raw_body)
        detail = f": {server_message.message}" if server_message and server_message.message else ""
        raise TeslaApiError(
            f"HTTP {status} from {endpoint.path}{detail}",
            status=status,
            server_message=server_message,
            endpoint=endpoint.path,
        )

    @staticmethod
    def _decode(endpoint: Endpoint, raw_body: bytes, result_type: Any) -> Any:
        if not raw_body.strip():
            raise TeslaDecodeError(f"Empty response body from {endpoint.path}", endpoint=endpoint.path)
        try:
            text = raw_body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TeslaDecodeError(f"Response from {endpoint.path} is not UTF-8", endpoint=endpoint.path) from exc
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TeslaDecodeError(
                f"Invalid JSON from {endpoint.path}: {text[:200]}",
                endpoint=endpoint.path,
            ) from exc
        try:
            return _adapter(result_type).validate_python(parsed)
        except ValidationError as exc:
            raise TeslaDecodeError(
                f"Unexpected response shape from {endpoint.path}: {exc.error_count()} error(s)",
                endpoint=endpoint.path,
            ) from exc
