"""Mapping of domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from commerce.domain.exceptions import (
    DomainException,
    ForbiddenError,
    InvalidReferenceError,
    NotFoundError,
    TransactionError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First match wins, so subclasses come before their bases.
STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (ValidationError, 400),
    (UnauthorizedError, 401),
    (ForbiddenError, 403),
    (NotFoundError, 404),
    (TransactionError, 500),
]


def status_for(exc: DomainException) -> int:
    for exc_type, status in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status
    return 500


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(DomainException)
    async def handle_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
        status = status_for(exc)
        if status >= 500:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
            )
            return JSONResponse(status_code=status, content={"message": "Internal server error"})

        body: dict = {"message": str(exc)}
        if isinstance(exc, InvalidReferenceError):
            body["invalidIds"] = exc.invalid_ids
        return JSONResponse(status_code=status, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()})
        return JSONResponse(
            status_code=400,
            content={"message": f"Malformed request field(s): {', '.join(fields)}"},
        )
