"""Verification transport interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import NamedTuple

STEAM_LOGIN_ENDPOINT = "https://steamcommunity.com/openid/login"
OPENID_NAMESPACE = "http://specs.openid.net/auth/2.0"

# Reported when the provider could not be reached at all.
UNREACHABLE_STATUS = 0


class ProviderReply(NamedTuple):
    status_code: int
    body: str


class VerificationClient(ABC):
    """Sends the check_authentication request to the provider."""

    @abstractmethod
    def send(self, fields: Mapping[str, str]) -> ProviderReply:
        """POST ``fields`` to the provider login endpoint and return status and body.

        Connection failures must be reported as ``UNREACHABLE_STATUS`` instead of raising.
        """


__all__ = ["OPENID_NAMESPACE", "ProviderReply", "STEAM_LOGIN_ENDPOINT", "UNREACHABLE_STATUS", "VerificationClient"]
