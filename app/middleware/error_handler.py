import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.exceptions import InvalidSessionInput


def register_error_handlers(app: FastAPI):
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        sentry_sdk.capture_exception(exc)
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "type": type(exc).__name__,
            },
        )

    @app.exception_handler(InvalidSessionInput)
    async def invalid_session_handler(request: Request, exc: InvalidSessionInput):
        return JSONResponse(
            status_code=422,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )
