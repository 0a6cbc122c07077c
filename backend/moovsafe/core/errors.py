"""Error taxonomy and the handlers that render it as ``{"error": ..., "details": [...]}``."""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[dict]] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequestError(ApiError):
    status_code = 400
    message = "Bad Request"


class RequestValidationFailed(BadRequestError):
    message = "Invalid data"


class NotFoundError(ApiError):
    status_code = 404
    message = "Not Found"


class ConflictError(ApiError):
    status_code = 409
    message = "Conflict"


class UploadError(ApiError):
    message = "Failed to upload images"


def validation_details(errors) -> List[dict]:
    """Flatten pydantic error dicts into field/message pairs."""
    details = []
    for error in errors:
        # Drop the "body"/"query"/"path" prefix FastAPI puts on locations
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return details


async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid data", "details": validation_details(exc.errors())},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
