"""
Error taxonomy shared by all feature packages.

Client-facing errors carry their own status code and the JSON key the
frontend reads (`signUpError`, `loginError`, `error`). Store failures are
raised by the gateway as `StoreError` and turned into a 500 response with a
route-specific `dbError` message via `store_failure()`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_DB_ERROR = "Chyba databázy"
INVALID_BODY_ERROR = "Neplatné telo požiadavky"
HASH_ERROR = "Nie je možné spracovať heslo"

# SQLSTATE class 23 codes that callers branch on.
UNIQUE_VIOLATION = "23505"


class ApiError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    body_key = "error"

    def __init__(self, message: str, *, body_key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if body_key is not None:
            self.body_key = body_key

    def body(self) -> dict:
        return {self.body_key: self.message}


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


class StoreError(RuntimeError):
    """
    Any driver or query failure, uninterpreted.

    `code` is the SQLSTATE when the server reported one, otherwise a short
    tag such as `TIMEOUT` or `CONNECTION`.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class DatabaseFailure(Exception):
    def __init__(self, message: str, *, details: str) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class CredentialHashError(RuntimeError):
    pass


@contextmanager
def store_failure(message: str) -> Iterator[None]:
    """
    Re-raise a `StoreError` from the wrapped block as a `DatabaseFailure`
    carrying the given user-facing message.
    """
    try:
        yield
    except StoreError as exc:
        raise DatabaseFailure(message, details=exc.message) from exc


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def _database_failure_handler(request: Request, exc: DatabaseFailure) -> JSONResponse:
    cause = exc.__cause__
    code = getattr(cause, "code", "")
    logger.error("db_failure path=%s code=%s details=%s", request.url.path, code, exc.details)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"dbError": exc.message, "details": exc.details},
    )


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("store_error path=%s code=%s details=%s", request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"dbError": GENERIC_DB_ERROR, "details": exc.message},
    )


async def _hash_error_handler(request: Request, exc: CredentialHashError) -> JSONResponse:
    # Never log the exception text: it may echo input.
    logger.error("credential_hash_failed path=%s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": HASH_ERROR},
    )


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": INVALID_BODY_ERROR},
    )


def install_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(DatabaseFailure, _database_failure_handler)
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(CredentialHashError, _hash_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
