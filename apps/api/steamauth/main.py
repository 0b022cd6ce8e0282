"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from steamauth.errors import ApiError
from steamauth.routes import auth_router


def create_app() -> FastAPI:
    app = FastAPI(title="Steam OpenID Login", version="1.0.0")

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    app.include_router(auth_router, prefix="/api/v1")

    return app


app = create_app()
