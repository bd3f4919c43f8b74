"""
Auth business logic: registration and login.

No tokens or sessions are issued; a successful login returns the user record.
"""

from __future__ import annotations

import logging

from core.db import Database
from core.errors import UNIQUE_VIOLATION, AuthError, ConflictError, StoreError, ValidationError, store_failure

from . import repository, schemas, security

logger = logging.getLogger(__name__)

SIGN_UP_KEY = "signUpError"
LOGIN_KEY = "loginError"

MISSING_FIELDS = "Prosím, vyplňte všetky polia"
ALREADY_EXISTS = "Užívateľské meno alebo email už existuje"
WRONG_EMAIL = "Nesprávny email"
WRONG_PASSWORD = "Nesprávne heslo"

REGISTER_DB_ERROR = "Nie je možné zaregistrovať sa(Chyba databázy)"
LOGIN_DB_ERROR = "Nie je možné prihlásiť sa"


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        email=str(user_row["email"]),
    )


async def register(db: Database, payload: schemas.RegisterRequest) -> schemas.UserResponse:
    if not payload.username or not payload.email or not payload.password:
        raise ValidationError(MISSING_FIELDS, body_key=SIGN_UP_KEY)

    password_hash = await security.hash_password_async(payload.password)

    with store_failure(REGISTER_DB_ERROR):
        try:
            user_row = await repository.create_user(
                db,
                username=payload.username,
                email=payload.email,
                password_hash=password_hash,
            )
        except StoreError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise ConflictError(ALREADY_EXISTS, body_key=SIGN_UP_KEY) from exc
            raise

    logger.info("user_registered user_id=%s", user_row["id"])
    return _to_user_response(user_row)


async def login(db: Database, payload: schemas.LoginRequest) -> schemas.UserResponse:
    with store_failure(LOGIN_DB_ERROR):
        user_row = await repository.get_user_by_email(db, payload.email or "")

    if user_row is None:
        raise AuthError(WRONG_EMAIL, body_key=LOGIN_KEY)

    is_valid = await security.verify_password_async(
        payload.password or "",
        str(user_row.get("password_hash") or ""),
    )
    if not is_valid:
        raise AuthError(WRONG_PASSWORD, body_key=LOGIN_KEY)

    return _to_user_response(user_row)
