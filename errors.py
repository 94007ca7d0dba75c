"""
Error taxonomy and the FastAPI handlers that turn it into JSON responses.

Validation problems carry enough detail to fix the input. Store problems
are logged in full and surfaced as an opaque 500.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

import config
from logger import get_trace_id

log = logging.getLogger("budget.errors")

MISSING_ASSUMPTIONS_MESSAGE = "Set assumptions first (current savings & as_of_date)."


class InvalidMonthKeyError(ValueError):
    """A month key did not match ``YYYY-MM`` or had a month outside 1-12."""

    def __init__(self, value, field="month"):
        self.value = value
        self.field = field
        super().__init__(f"Invalid {field}. Use YYYY-MM.")


class MissingAssumptionsError(Exception):
    """The user has no savings baseline, so no forecast can be produced."""

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(MISSING_ASSUMPTIONS_MESSAGE)


class UnauthenticatedError(Exception):
    """No caller identity reached the API."""


class UnknownReferenceError(ValueError):
    """A payload referenced a category or merchant that does not exist."""


class NotFoundError(Exception):
    pass


class ConflictError(Exception):
    pass


class StoreError(Exception):
    """A read or write against the store failed or timed out."""


def _body(request: Request, error: str, **extra) -> dict:
    return {"trace_id": get_trace_id(request), "error": error, **extra}


def register_error_handlers(app: FastAPI):

    @app.exception_handler(InvalidMonthKeyError)
    async def invalid_month_handler(request: Request, exc: InvalidMonthKeyError):
        log.warning(f"Invalid month key {exc.value!r} for {exc.field}")
        return JSONResponse(
            status_code=400,
            content=_body(request, "ValidationError", message=str(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        log.warning(f"Validation failed on {request.url.path}")
        return JSONResponse(
            status_code=400,
            content=_body(request, "ValidationError", issues=jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
        return JSONResponse(
            status_code=401,
            content=_body(request, "Unauthenticated", message=str(exc) or "Unauthenticated"),
        )

    @app.exception_handler(UnknownReferenceError)
    async def unknown_reference_handler(request: Request, exc: UnknownReferenceError):
        log.warning(f"Unknown reference on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content=_body(request, "ValidationError", message=str(exc)),
        )

    @app.exception_handler(MissingAssumptionsError)
    async def missing_assumptions_handler(request: Request, exc: MissingAssumptionsError):
        log.info(f"No assumptions for user {exc.user_id}")
        return JSONResponse(
            status_code=412,
            content=_body(request, "MissingAssumptions", message=str(exc)),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_body(request, "NotFound", message=str(exc) or "Not found"),
        )

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(
            status_code=409,
            content=_body(request, "Conflict", message=str(exc)),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        log.error(
            f"Store failure on {request.url.path} trace_id={get_trace_id(request)}: {exc!r}",
            exc_info=exc.__cause__ or exc,
        )
        return JSONResponse(
            status_code=500,
            content=_body(request, "InternalServerError", message="Internal Server Error"),
        )

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        log.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        message = "Internal Server Error" if config.is_production() else str(exc)
        return JSONResponse(
            status_code=500,
            content=_body(request, "InternalServerError", message=message),
        )
