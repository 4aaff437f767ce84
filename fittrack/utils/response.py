import logging

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException

from fittrack.config import settings
from fittrack.utils.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    LogNotFoundError,
    NutritionServiceUnavailable,
)

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    DuplicateEmailError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    LogNotFoundError: status.HTTP_404_NOT_FOUND,
    NutritionServiceUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_response(
    message: str,
    data=None,
    status_code: int = status.HTTP_200_OK,
    status_text: str | None = None,
    details: str | None = None,
) -> JSONResponse:
    """Return a consistent API response payload and status code."""
    payload_status = status_text or ("success" if status_code < 400 else "error")
    content = {
        "message": message,
        "data": jsonable_encoder(data),
        "status": payload_status,
        "status_code": status_code,
    }
    if status_code >= 400:
        content["error"] = message
        if details:
            content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def handle_exception(error: Exception, fallback_message: str = "Internal server error") -> JSONResponse:
    """Coerce raised errors into the shared response structure."""
    if isinstance(error, HTTPException):
        detail = error.detail if isinstance(error.detail, str) else str(error.detail)
        return create_response(detail, None, error.status_code, status_text="error")

    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(error, error_type):
            return create_response(str(error), None, status_code, status_text="error")

    if isinstance(error, OperationalError):
        logger.error("Database unavailable: %s", error)
        return create_response(
            "Database connection failed",
            None,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            status_text="error",
        )

    logger.exception("Unhandled error: %s", error, exc_info=error)
    details = str(error) if settings.DEBUG and not settings.is_production else None
    return create_response(
        fallback_message,
        None,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        status_text="error",
        details=details,
    )


def validation_message(errors: list[dict]) -> str:
    """Turn pydantic's error list into one field-specific sentence."""
    if not errors:
        return "Invalid request"
    error = errors[0]
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "body"
    if error.get("type") == "value_error" and error.get("ctx", {}).get("error"):
        return str(error["ctx"]["error"])
    if error.get("type") == "missing":
        return f"{field} is required"
    if error.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    return f"{field}: {error.get('msg', 'invalid value')}"
