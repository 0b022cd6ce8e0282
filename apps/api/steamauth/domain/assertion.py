"""Steam OpenID 2.0 positive assertion validation.

An assertion arrives as query parameters on the browser redirect back from Steam,
so every field is attacker controlled. ``SteamOpenIDValidator.validate`` checks
the fields locally and only then asks Steam to confirm them with a
``check_authentication`` request.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from steamauth.adapters.verification.base import (
    OPENID_NAMESPACE,
    STEAM_LOGIN_ENDPOINT,
    VerificationClient,
)
from steamauth.core.logging_safety import safe_log_identifier
from steamauth.domain.key_values import parse_key_values
from steamauth.domain.nonce import DEFAULT_MAX_SKEW_SECONDS, check_nonce_freshness
from steamauth.errors import (
    InvalidAssertionError,
    OpenIDErrorKind,
    RateLimitedError,
    VerificationFailedError,
)
from steamauth.schemas.auth import ValidatedAssertion

logger = logging.getLogger(__name__)

ASSERTION_FIELDS: tuple[str, ...] = (
    "openid.mode",
    "openid.ns",
    "openid.op_endpoint",
    "openid.claimed_id",
    "openid.identity",
    "openid.return_to",
    "openid.response_nonce",
    "openid.assoc_handle",
    "openid.signed",
    "openid.sig",
)

EXPECTED_SIGNED_FIELDS = "signed,op_endpoint,claimed_id,identity,return_to,response_nonce,assoc_handle"

STEAM_ID_MIN = 76561197960265728
STEAM_ID_MAX = 76561202255233023

_IDENTITY_PATTERN = re.compile(r"https://steamcommunity\.com/openid/id/(76561[0-9]{12})/?")

_RATE_LIMIT_STATUSES = frozenset({403, 429})


def _wrong_field(field: str, reason: str) -> InvalidAssertionError:
    return InvalidAssertionError(
        OpenIDErrorKind.WRONG_FIELD_VALUE,
        f"Wrong {field}: {reason}",
        field=field,
    )


def extract_assertion_fields(fields: Mapping[str, Any]) -> dict[str, str]:
    """Copy the required ``openid.*`` fields, insisting each one is a plain string."""
    extracted: dict[str, str] = {}
    for name in ASSERTION_FIELDS:
        value = fields.get(name)
        if not isinstance(value, str):
            raise InvalidAssertionError(
                OpenIDErrorKind.MISSING_OR_MALFORMED_FIELD,
                f"{name} is not a string",
                field=name,
            )
        extracted[name] = value
    return extracted


def extract_steam_id(identity: str) -> str | None:
    """Return the SteamID64 embedded in a Steam identity URL, or None."""
    match = _IDENTITY_PATTERN.fullmatch(identity)
    if match is None:
        return None

    steam_id = match.group(1)
    if not STEAM_ID_MIN <= int(steam_id) <= STEAM_ID_MAX:
        return None
    return steam_id


class SteamOpenIDValidator:
    """Validates Steam OpenID logins returning to ``self_url``.

    ``self_url`` is matched as a prefix of ``openid.return_to``, so extra query
    parameters appended by the provider are tolerated. Validators hold no mutable
    state and can be shared across threads.
    """

    def __init__(
        self,
        self_url: str,
        client: VerificationClient,
        *,
        max_nonce_skew_seconds: int = DEFAULT_MAX_SKEW_SECONDS,
    ) -> None:
        if not self_url:
            raise ValueError("self_url must not be empty")
        self._self_url = self_url
        self._client = client
        self._max_nonce_skew_seconds = max_nonce_skew_seconds

    @staticmethod
    def should_validate(fields: Mapping[str, Any]) -> bool:
        """True when the request carries a positive assertion (``openid.mode=id_res``)."""
        return fields.get("openid.mode") == "id_res"

    def check_assertion(self, fields: Mapping[str, Any], now: datetime | None = None) -> ValidatedAssertion:
        """Run every local check on an assertion without contacting the provider."""
        arguments = extract_assertion_fields(fields)

        if arguments["openid.mode"] != "id_res":
            raise _wrong_field("openid.mode", "expected id_res")

        if arguments["openid.claimed_id"] != arguments["openid.identity"]:
            raise _wrong_field("openid.claimed_id", "does not match openid.identity")

        if arguments["openid.ns"] != OPENID_NAMESPACE:
            raise _wrong_field("openid.ns", "unexpected namespace")

        if arguments["openid.op_endpoint"] != STEAM_LOGIN_ENDPOINT:
            raise _wrong_field("openid.op_endpoint", "unexpected provider endpoint")

        if arguments["openid.signed"] != EXPECTED_SIGNED_FIELDS:
            raise _wrong_field("openid.signed", "unexpected signed field list")

        if not arguments["openid.return_to"].startswith(self._self_url):
            raise _wrong_field("openid.return_to", "does not point back to this site")

        steam_id = extract_steam_id(arguments["openid.identity"])
        if steam_id is None:
            raise _wrong_field("openid.identity", "not a Steam community identity")

        check_nonce_freshness(
            arguments["openid.response_nonce"],
            now,
            max_skew_seconds=self._max_nonce_skew_seconds,
        )

        return ValidatedAssertion(fields=arguments, steam_id=steam_id)

    def validate(self, fields: Mapping[str, Any], now: datetime | None = None) -> str:
        """Validate an assertion and confirm it with Steam, returning the SteamID64.

        Raises ``InvalidAssertionError`` before any network traffic when the fields
        are malformed, and ``VerificationFailedError`` when Steam does not confirm them.
        """
        try:
            assertion = self.check_assertion(fields, now)
        except InvalidAssertionError as exc:
            logger.warning(
                "openid.rejected reason=%s field=%s",
                exc.kind.value,
                exc.field,
            )
            raise

        request_fields = dict(assertion.fields)
        request_fields["openid.mode"] = "check_authentication"

        reply = self._client.send(request_fields)
        if reply.status_code != 200:
            logger.warning("openid.verification_failed status=%s", reply.status_code)
            if reply.status_code in _RATE_LIMIT_STATUSES:
                raise RateLimitedError(reply.status_code)
            raise VerificationFailedError(
                OpenIDErrorKind.TRANSPORT_FAILURE,
                "Failed to verify your login with Steam, it could be down",
                status_code=reply.status_code,
            )

        response = parse_key_values(reply.body)
        if response.get("ns") != OPENID_NAMESPACE:
            logger.warning("openid.verification_failed reason=malformed_provider_response")
            raise VerificationFailedError(
                OpenIDErrorKind.MALFORMED_PROVIDER_RESPONSE,
                "Steam did not return a valid OpenID response",
            )

        if response.get("is_valid") != "true":
            logger.warning("openid.verification_failed reason=assertion_rejected")
            raise VerificationFailedError(
                OpenIDErrorKind.ASSERTION_REJECTED,
                "Failed to verify your login with Steam",
            )

        logger.info("openid.accepted steam_id=%s", safe_log_identifier(assertion.steam_id, prefix="sid"))
        return assertion.steam_id


__all__ = [
    "ASSERTION_FIELDS",
    "EXPECTED_SIGNED_FIELDS",
    "SteamOpenIDValidator",
    "extract_assertion_fields",
    "extract_steam_id",
]
