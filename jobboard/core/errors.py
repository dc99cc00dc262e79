"""
Error taxonomy for store operations and its mapping onto HTTP responses.

Every failure is reduced to one of three kinds. NOT_FOUND becomes a 404;
VALIDATION and INFRA both become the same opaque 500 so clients cannot
tell a rejected field from a broken database. The original error is only
written to the server log.
"""

import enum
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = {"message": "not found"}
SERVER_ERROR_BODY = {"message": "server error"}


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "NotFound"
    VALIDATION = "Validation"
    INFRA = "Infra"


class StoreError(Exception):
    """A failed store operation, tagged with its kind."""

    def __init__(self, kind: ErrorKind, detail: str):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail

    @classmethod
    def not_found(cls, detail: str) -> "StoreError":
        return cls(ErrorKind.NOT_FOUND, detail)

    @classmethod
    def validation(cls, detail: str) -> "StoreError":
        return cls(ErrorKind.VALIDATION, detail)

    def __repr__(self):
        return f"<StoreError(kind={self.kind.value}, detail='{self.detail}')>"


@contextmanager
def translate_errors(db: Optional[Session] = None) -> Iterator[None]:
    """
    Run a block of store statements, converting failures into StoreError.

    Field validators raise ValueError, out-of-range integers raise
    OverflowError in the driver and constraint violations raise
    IntegrityError; all are VALIDATION. Anything else SQLAlchemy raises is
    INFRA. The session, when given, is rolled back before the error
    propagates.
    """
    try:
        yield
    except StoreError:
        if db is not None:
            db.rollback()
        raise
    except (ValueError, OverflowError, IntegrityError) as e:
        if db is not None:
            db.rollback()
        raise StoreError(ErrorKind.VALIDATION, str(e)) from e
    except SQLAlchemyError as e:
        if db is not None:
            db.rollback()
        raise StoreError(ErrorKind.INFRA, str(e)) from e


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    if exc.kind is ErrorKind.NOT_FOUND:
        logger.info(f"{request.method} {request.url.path}: {exc.detail}")
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NOT_FOUND_BODY)

    logger.error(f"{request.method} {request.url.path} failed [{exc.kind.value}]: {exc.detail}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=SERVER_ERROR_BODY)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are validation failures like any other."""
    return await store_error_handler(
        request, StoreError(ErrorKind.VALIDATION, f"invalid request: {exc.errors()}")
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed [{ErrorKind.INFRA.value}]: {exc!r}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=SERVER_ERROR_BODY)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
