"""Authentication endpoint.

Endpoint:
  - POST /oauth/token (password grant)
"""

from __future__ import annotations

import logging
from typing import Any

from pytesla import _endpoints
from pytesla._constants import GRANT_TYPE_PASSWORD
from pytesla._redact import redact_for_log
from pytesla._transport import Transport
from pytesla.config import TeslaConfig
from pytesla.exceptions import TeslaApiError, TeslaAuthenticationFailedError
from pytesla.models.token import AuthToken
from pytesla.session import Credentials

_logger = logging.getLogger(__name__)


def build_login_request(config: TeslaConfig, credentials: Credentials) -> dict[str, Any]:
    """Build the JSON body for the password grant."""
    return {
        "email": credentials.email,
        "password": credentials.password,
        "grant_type": GRANT_TYPE_PASSWORD,
        "client_id": config.client_id,
        "client_secret": config.client_secret,
    }


async def request_token(
    config: TeslaConfig,
    transport: Transport,
    credentials: Credentials,
) -> AuthToken:
    """Exchange *credentials* for an :class:`AuthToken`.

    Raises
    ------
    TeslaAuthenticationFailedError
        The server answered 401.
    TeslaApiError, TeslaDecodeError, TeslaTransportError
        Any other failure, unchanged.
    """
    body = build_login_request(config, credentials)
    _logger.debug("Requesting token body=%s", redact_for_log(body))
    try:
        token: AuthToken = await transport.execute(
            _endpoints.authentication(),
            result_type=AuthToken,
            body=body,
        )
    except TeslaApiError as exc:
        if exc.status == 401:
            raise TeslaAuthenticationFailedError(
                f"Authentication rejected for {credentials.email}",
            ) from exc
        raise
    _logger.debug("Token issued expires_at=%s", token.expires_at)
    return token
