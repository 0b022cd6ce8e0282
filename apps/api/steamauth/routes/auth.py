"""Steam login routes."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from steamauth.core.logging_safety import describe_field_shapes, safe_log_identifier
from steamauth.errors import (
    ApiError,
    InvalidAssertionError,
    OpenIDError,
    OpenIDErrorKind,
    RateLimitedError,
)
from steamauth.routes.dependencies import (
    get_assertion_fields,
    get_login_service,
    get_request_correlation_id,
)
from steamauth.schemas.auth import LoginRedirect, SteamPrincipal
from steamauth.schemas.error import ErrorResponse
from steamauth.services.login import LoginService

router = APIRouter(prefix="/auth/steam", tags=["Steam Login"])
logger = logging.getLogger(__name__)


def _to_api_error(exc: OpenIDError) -> ApiError:
    details = {"kind": exc.kind.value}
    if exc.field is not None:
        details["field"] = exc.field

    if isinstance(exc, InvalidAssertionError):
        return ApiError(status_code=401, code="INVALID_ASSERTION", message="Invalid login response", details=details)
    if isinstance(exc, RateLimitedError):
        return ApiError(status_code=429, code="PROVIDER_RATE_LIMITED", message=str(exc), details=details)
    if exc.kind is OpenIDErrorKind.ASSERTION_REJECTED:
        return ApiError(status_code=401, code="ASSERTION_REJECTED", message=str(exc), details=details)
    return ApiError(status_code=502, code="VERIFICATION_FAILED", message=str(exc), details=details)


@router.get("/login", status_code=status.HTTP_302_FOUND, response_class=RedirectResponse)
def login(service: Annotated[LoginService, Depends(get_login_service)]) -> RedirectResponse:
    return RedirectResponse(service.login_redirect().url, status_code=status.HTTP_302_FOUND)


@router.get("/login-request", response_model=LoginRedirect)
def login_request(service: Annotated[LoginService, Depends(get_login_service)]) -> LoginRedirect:
    return service.login_redirect()


@router.get(
    "/callback",
    response_model=SteamPrincipal,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def callback(
    fields: Annotated[dict[str, Any], Depends(get_assertion_fields)],
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    service: Annotated[LoginService, Depends(get_login_service)],
) -> SteamPrincipal:
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
    if not service.should_validate(fields):
        logger.info("login.not_completed correlation_id=%s", safe_correlation_id)
        raise ApiError(status_code=400, code="LOGIN_NOT_COMPLETED", message="Steam login was not completed")

    try:
        principal = service.complete_login(fields)
    except OpenIDError as exc:
        logger.warning(
            "login.rejected correlation_id=%s reason=%s fields=%s",
            safe_correlation_id,
            exc.kind.value,
            describe_field_shapes(fields),
        )
        raise _to_api_error(exc) from exc

    logger.info(
        "login.accepted correlation_id=%s steam_id=%s",
        safe_correlation_id,
        safe_log_identifier(principal.steam_id, prefix="sid"),
    )
    return principal
