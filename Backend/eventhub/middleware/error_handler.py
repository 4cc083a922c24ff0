import logging

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventhub.errors import APIError
from eventhub.messages import APIMessage

logger = logging.getLogger(__name__)


def _envelope(message: str, status_code: int, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "http_status_code": status_code, **extra},
    )


def register_error_handlers(app: FastAPI):
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            sentry_sdk.capture_exception(exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _envelope(APIMessage.ROUTE_NOT_FOUND.value, exc.status_code)
        return _envelope(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        invalid_fields = [
            {"field": str(error["loc"][-1]), "message": error["msg"]} for error in exc.errors()
        ]
        return _envelope(
            APIMessage.ERROR_REQUEST_BODY_FORMAT.value,
            status.HTTP_400_BAD_REQUEST,
            invalid_fields=invalid_fields,
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return _envelope(str(exc), status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        sentry_sdk.capture_exception(exc)
        return _envelope(
            APIMessage.INTERNAL_SERVER_ERROR.value,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            stacktrace={"type": type(exc).__name__},
        )
