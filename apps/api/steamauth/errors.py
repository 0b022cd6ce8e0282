"""Application exception types."""

from __future__ import annotations

from enum import Enum

from steamauth.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        super().__init__(message)


class OpenIDErrorKind(str, Enum):
    MISSING_OR_MALFORMED_FIELD = "missing_or_malformed_field"
    WRONG_FIELD_VALUE = "wrong_field_value"
    MALFORMED_NONCE = "malformed_nonce"
    NONCE_TOO_OLD = "nonce_too_old"
    RATE_LIMITED = "rate_limited"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_PROVIDER_RESPONSE = "malformed_provider_response"
    ASSERTION_REJECTED = "assertion_rejected"


class OpenIDError(Exception):
    """Base error for assertion validation and verification.

    ``kind`` identifies the failure, ``field`` names the offending ``openid.*``
    field where there is one, and ``status_code`` holds the provider HTTP status
    for transport failures.
    """

    def __init__(
        self,
        kind: OpenIDErrorKind,
        message: str,
        *,
        field: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.field = field
        self.status_code = status_code
        super().__init__(message)


class InvalidAssertionError(OpenIDError):
    """Inbound assertion is missing, malformed or tampered with.

    Always raised before any request is sent to the provider.
    """


class VerificationFailedError(OpenIDError):
    """The check_authentication round trip did not confirm the assertion."""


class RateLimitedError(VerificationFailedError):
    """Provider answered 403 or 429 to the verification request."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            OpenIDErrorKind.RATE_LIMITED,
            "Steam is rate limiting verification requests, try again later",
            status_code=status_code,
        )


__all__ = [
    "ApiError",
    "InvalidAssertionError",
    "OpenIDError",
    "OpenIDErrorKind",
    "RateLimitedError",
    "VerificationFailedError",
]
