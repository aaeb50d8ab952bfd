"""Exception handler registration normalizing failures to the API error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_errors.core.codes import ErrorCode
from api_errors.core.config import get_error_settings
from api_errors.core.errors import ApiError
from api_errors.core.errors import ApiErrorParseError
from api_errors.core.transformers import api_error_from_validation_error

logger = logging.getLogger(__name__)

_CODE_BY_HTTP_STATUS = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.INVALID_ARGUMENT,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorCode.PERMISSION_DENIED,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.ALREADY_EXISTS,
    status.HTTP_429_TOO_MANY_REQUESTS: ErrorCode.TOO_MANY_REQUESTS,
    status.HTTP_503_SERVICE_UNAVAILABLE: ErrorCode.UNAVAILABLE,
}


def _http_error_code(status_code: int) -> ErrorCode:
    code = _CODE_BY_HTTP_STATUS.get(status_code)
    if code is not None:
        return code
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ErrorCode.INTERNAL
    return ErrorCode.INVALID_ARGUMENT


def _render(error: ApiError) -> JSONResponse:
    if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed with server error: %s", error.to_log_dict())
    else:
        logger.info("Request failed with client error: %s", error.to_log_dict())
    return error.into_response()


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Report FastAPI validation errors as INVALID_ARGUMENT with field violations."""

    return _render(api_error_from_validation_error(exc))


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize HTTP exceptions to the error envelope."""

    if isinstance(exc.detail, dict):
        try:
            return _render(ApiError.from_payload(exc.detail))
        except ApiErrorParseError:
            logger.debug("HTTPException detail is not an error envelope; using status mapping")

    message = str(exc.detail) if isinstance(exc.detail, str) and exc.detail else "Request failed"
    return _render(ApiError(_http_error_code(exc.status_code), message))


async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    """Return explicitly raised API errors as-is."""

    return _render(exc)


async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Avoid leaking internal exceptions while keeping response shape stable."""

    logger.exception("Unhandled exception while serving request", exc_info=exc)
    return ApiError(ErrorCode.UNKNOWN, get_error_settings().internal_message).into_response()


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
