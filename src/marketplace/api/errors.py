"""Exception handlers that render every failure in the error envelope.

``{"error": <title>, "message": <text>, "details": [...]}``. 4xx messages are
specific; 5xx messages are generic unless ``expose_error_details`` is on.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.errors import MarketplaceError
from marketplace.utils.settings import setting

logger = structlog.get_logger(__name__)

_GENERIC_SERVER_MESSAGE = "Something went wrong. Please try again later."


def error_response(status_code: int, error: str, message: str, details: list | dict | None = None) -> JSONResponse:
    content = {"error": error, "message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _field_name(location) -> str:
    parts = [str(part) for part in location if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [{"field": _field_name(error["loc"]), "message": error["msg"]} for error in exc.errors()]
    return error_response(400, "Validation Error", "Invalid input data", details)


async def domain_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    details = [
        {"field": field, "message": message}
        for field, messages in exc.messages.items()
        for message in (messages if isinstance(messages, list) else [messages])
    ]
    message = details[0]["message"] if len(details) == 1 else "Invalid input data"
    return error_response(400, "Validation Error", message, details)


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return error_response(404, "Not Found", "The requested resource does not exist")


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", error=exc.title, message=exc.message, path=request.url.path)
        if not setting("expose_error_details"):
            return error_response(exc.status_code, exc.title, _GENERIC_SERVER_MESSAGE)
    return error_response(exc.status_code, exc.title, exc.message, exc.details)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    message = str(exc) if setting("expose_error_details") else _GENERIC_SERVER_MESSAGE
    return error_response(500, "Internal Server Error", message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
