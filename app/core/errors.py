from typing import Any, Dict, List, Optional

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.messages import ErrorMessageKeys

logger = structlog.get_logger(__name__)


class ApiError(HTTPException):
    """HTTPException carrying a symbolic message key instead of a literal detail."""

    def __init__(
        self,
        status_code: int,
        key: ErrorMessageKeys,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=status_code, detail=key.value, headers=headers)
        self.key = key
        self.params = params or {}


def not_found(resource: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, ErrorMessageKeys.ERROR_NOT_FOUND, {"resource": resource})


def forbidden(key: ErrorMessageKeys = ErrorMessageKeys.ERROR_FORBIDDEN) -> ApiError:
    return ApiError(status.HTTP_403_FORBIDDEN, key)


def unauthorized(key: ErrorMessageKeys = ErrorMessageKeys.AUTH_UNAUTHORIZED) -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, key, headers={"WWW-Authenticate": "Bearer"})


def error_body(key: str, params: Optional[Dict[str, Any]] = None, errors: Optional[List[dict]] = None) -> dict:
    body: Dict[str, Any] = {"success": False, "message": {"key": key, "params": params or {}}}
    if errors is not None:
        body["errors"] = errors
    return body


_STATUS_KEYS = {
    status.HTTP_401_UNAUTHORIZED: ErrorMessageKeys.AUTH_UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorMessageKeys.ERROR_FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorMessageKeys.ERROR_NOT_FOUND,
}


def _validation_key(error: dict) -> ErrorMessageKeys:
    error_type = error.get("type", "")
    if error_type == "missing":
        return ErrorMessageKeys.VALIDATION_REQUIRED
    if error_type == "string_too_short":
        return ErrorMessageKeys.VALIDATION_MIN_LENGTH
    if error_type == "string_too_long":
        return ErrorMessageKeys.VALIDATION_MAX_LENGTH
    if error_type == "value_error" and "email" in str(error.get("msg", "")).lower():
        return ErrorMessageKeys.VALIDATION_EMAIL_INVALID
    return ErrorMessageKeys.VALIDATION_INVALID


def _validation_params(error: dict) -> Dict[str, Any]:
    ctx = error.get("ctx") or {}
    params: Dict[str, Any] = {}
    if "min_length" in ctx:
        params["min"] = ctx["min_length"]
    if "max_length" in ctx:
        params["max"] = ctx["max_length"]
    return params


def format_validation_errors(errors: List[dict]) -> List[dict]:
    formatted = []
    for error in errors:
        # Drop the "body"/"query"/"path" prefix pydantic adds to request locations
        loc = [str(part) for part in error.get("loc", ())[1:]] or [str(part) for part in error.get("loc", ())]
        formatted.append({
            "field": ".".join(loc),
            "rule": error.get("type", "invalid"),
            "message": {"key": _validation_key(error).value, "params": _validation_params(error)},
        })
    return formatted


async def api_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ApiError):
        key, params = exc.key.value, exc.params
    else:
        key, params = _STATUS_KEYS.get(exc.status_code, ErrorMessageKeys.ERROR_GENERIC).value, {}
    headers = getattr(exc, "headers", None)
    return JSONResponse(status_code=exc.status_code, content=error_body(key, params), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.info("request_validation_failed", path=request.url.path, fields=[e["field"] for e in errors])
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(error_body(ErrorMessageKeys.VALIDATION_FAILED.value, errors=errors)),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_request_error", path=request.url.path, method=request.method, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(ErrorMessageKeys.ERROR_SERVER.value),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
