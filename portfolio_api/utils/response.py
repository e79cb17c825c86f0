import logging

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from portfolio_api.config import settings
from portfolio_api.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


def create_response(
    message: str,
    data=None,
    status_code: int = status.HTTP_200_OK,
    errors: list[dict] | None = None,
    headers: dict | None = None,
    **extra,
) -> JSONResponse:
    """Return a consistent API response payload and status code."""
    content = {
        "success": status_code < 400,
        "message": message,
        "data": jsonable_encoder(data),
    }
    if errors is not None:
        content["errors"] = errors
    content.update(jsonable_encoder(extra))
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def handle_exception(error: Exception, fallback_message: str = "Server error") -> JSONResponse:
    """Coerce raised errors into the shared response structure."""
    if isinstance(error, ValidationError):
        return create_response(error.detail, None, error.status_code, errors=error.errors)

    if isinstance(error, HTTPException):
        detail = error.detail if isinstance(error.detail, str) else str(error.detail)
        return create_response(detail, None, error.status_code, headers=error.headers)

    logger.error("Unhandled error: %s", error, exc_info=error)
    extra = {} if settings.is_production else {"error": str(error)}
    return create_response(
        fallback_message, None, status.HTTP_500_INTERNAL_SERVER_ERROR, **extra
    )
