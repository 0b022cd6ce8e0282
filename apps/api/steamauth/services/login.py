"""Login redirect and callback service layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode, urlsplit

from steamauth.adapters.verification.base import OPENID_NAMESPACE, STEAM_LOGIN_ENDPOINT
from steamauth.domain.assertion import SteamOpenIDValidator
from steamauth.schemas.auth import LoginRedirect, SteamPrincipal

IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"


def default_realm(self_url: str) -> str:
    parts = urlsplit(self_url)
    return f"{parts.scheme}://{parts.netloc}/"


def build_login_form_fields(self_url: str, realm: str | None = None) -> dict[str, str]:
    """Fields for a checkid_setup request that sends the user to Steam to sign in."""
    return {
        "openid.identity": IDENTIFIER_SELECT,
        "openid.claimed_id": IDENTIFIER_SELECT,
        "openid.ns": OPENID_NAMESPACE,
        "openid.mode": "checkid_setup",
        "openid.realm": realm or default_realm(self_url),
        "openid.return_to": self_url,
    }


def build_login_url(self_url: str, realm: str | None = None) -> str:
    return f"{STEAM_LOGIN_ENDPOINT}?{urlencode(build_login_form_fields(self_url, realm))}"


class LoginService:
    def __init__(self, validator: SteamOpenIDValidator, self_url: str, realm: str | None = None) -> None:
        self._validator = validator
        self._self_url = self_url
        self._realm = realm

    def login_redirect(self) -> LoginRedirect:
        return LoginRedirect(
            url=build_login_url(self._self_url, self._realm),
            form_fields=build_login_form_fields(self._self_url, self._realm),
        )

    def should_validate(self, fields: Mapping[str, Any]) -> bool:
        return self._validator.should_validate(fields)

    def complete_login(self, fields: Mapping[str, Any]) -> SteamPrincipal:
        return SteamPrincipal(steam_id=self._validator.validate(fields))
