"""Steam check_authentication client backed by httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from steamauth.adapters.verification.base import (
    STEAM_LOGIN_ENDPOINT,
    UNREACHABLE_STATUS,
    ProviderReply,
    VerificationClient,
)

logger = logging.getLogger(__name__)


class HttpxVerificationClient(VerificationClient):
    """Posts form-encoded assertions to the Steam OpenID endpoint.

    Makes exactly one attempt per call. Redirects are not followed.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        connect_timeout: float = 6.0,
        timeout: float = 6.0,
        endpoint: str = STEAM_LOGIN_ENDPOINT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._user_agent = user_agent
        self._timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._transport = transport

    def send(self, fields: Mapping[str, str]) -> ProviderReply:
        try:
            with httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
                headers={"User-Agent": self._user_agent},
                follow_redirects=False,
            ) as client:
                response = client.post(self._endpoint, data=dict(fields))
        except httpx.HTTPError as exc:
            logger.warning(
                "openid.transport_error endpoint=%s error=%s",
                self._endpoint,
                type(exc).__name__,
            )
            return ProviderReply(UNREACHABLE_STATUS, "")

        return ProviderReply(response.status_code, response.text)


__all__ = ["HttpxVerificationClient"]
