"""Dependency wiring for routes."""

from __future__ import annotations

from typing import Annotated, Any
from uuid import uuid4

from fastapi import Depends, Request

from steamauth.adapters.verification import (
    HttpxVerificationClient,
    MockVerificationClient,
    VerificationClient,
)
from steamauth.core.config import Settings, get_settings
from steamauth.domain.assertion import SteamOpenIDValidator
from steamauth.services.login import LoginService


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_request_correlation_id(request: Request) -> str:
    return _request_correlation_id(request)


def get_assertion_fields(request: Request) -> dict[str, Any]:
    """Collect query parameters into an explicit field mapping.

    A key given more than once becomes a list so the validator rejects it as a
    non-string field instead of silently picking one value.
    """
    fields: dict[str, Any] = {}
    for key, value in request.query_params.multi_items():
        if key in fields:
            previous = fields[key]
            fields[key] = [*previous, value] if isinstance(previous, list) else [previous, value]
        else:
            fields[key] = value
    return fields


def get_verification_client(settings: Annotated[Settings, Depends(get_settings)]) -> VerificationClient:
    """Resolve provider adapter from configuration."""
    if settings.verification_provider == "steam":
        return HttpxVerificationClient(
            user_agent=settings.user_agent,
            connect_timeout=settings.connect_timeout_seconds,
            timeout=settings.timeout_seconds,
        )
    return MockVerificationClient()


def get_validator(
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[VerificationClient, Depends(get_verification_client)],
) -> SteamOpenIDValidator:
    return SteamOpenIDValidator(
        settings.self_url,
        client,
        max_nonce_skew_seconds=settings.nonce_max_skew_seconds,
    )


def get_login_service(
    settings: Annotated[Settings, Depends(get_settings)],
    validator: Annotated[SteamOpenIDValidator, Depends(get_validator)],
) -> LoginService:
    return LoginService(validator, settings.self_url, settings.realm)
