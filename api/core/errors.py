"""
Catalog error taxonomy and its HTTP mapping.

Services raise `CatalogError` subclasses; the handlers registered by
`register_exception_handlers` turn them into JSON bodies at the boundary:

- ValidationError -> 400 {"message"}
- NotFoundError   -> 404 {"message"}
- InternalError   -> 500 {"message", "error"}
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(CatalogError):
    def __init__(self, message: str, *, error: str = "") -> None:
        super().__init__(message)
        self.error = error

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "error": self.error}


@contextmanager
def reported_as(action: str) -> Iterator[None]:
    """
    Re-raise catalog errors as-is; wrap anything else in an InternalError
    whose message names the failed `action` ("fetching comics", ...).
    """
    try:
        yield
    except CatalogError:
        raise
    except Exception as exc:
        logger.exception("request_failed action=%r", action)
        raise InternalError(f"An error occurred while {action}", error=str(exc)) from exc


async def _catalog_error_handler(_: Request, exc: CatalogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", ""))}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Request body is malformed", "errors": errors},
    )


async def _unhandled_error_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error type=%s", type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An unexpected error occurred", "error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, _catalog_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
