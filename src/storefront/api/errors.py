"""Exception-to-status mapping for the HTTP layer.

Protean's stock handlers are registered first; the storefront handlers below
take precedence for the exceptions they name.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, InvalidStateError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import logger
from storefront.exceptions import AuthenticationError, StockUnavailableError


def _messages(exc):
    return getattr(exc, "messages", None) or {"_error": [str(exc)]}


async def validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": _messages(exc)})


async def request_validation_error(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body") or "_body"
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(status_code=400, content={"error": errors})


async def not_found(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"error": _messages(exc)})


async def conflict(request: Request, exc: InvalidStateError):
    content = {"error": _messages(exc)}
    if isinstance(exc, StockUnavailableError):
        content["product_id"] = exc.product_id
        content["available"] = exc.available
        content["requested"] = exc.requested
    return JSONResponse(status_code=409, content=content)


async def version_conflict(request: Request, exc: ExpectedVersionError):
    logger.warning("version_conflict", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=409,
        content={"error": {"_entity": ["The resource was modified concurrently, please retry"]}},
    )


async def authentication_error(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=401,
        content={"error": {"_auth": [str(exc)]}},
        headers={"WWW-Authenticate": "Bearer"},
    )


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(ValidationError, validation_error)
    app.add_exception_handler(RequestValidationError, request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, not_found)
    app.add_exception_handler(InvalidStateError, conflict)
    app.add_exception_handler(ExpectedVersionError, version_conflict)
    app.add_exception_handler(AuthenticationError, authentication_error)
