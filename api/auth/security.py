"""
Password hashing helpers (bcrypt).
"""

from __future__ import annotations

import bcrypt
from fastapi.concurrency import run_in_threadpool

from core.errors import CredentialHashError

BCRYPT_ROUNDS = 10
# bcrypt only uses the first 72 bytes; longer input is truncated, not rejected.
BCRYPT_MAX_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return (plain_password or "").encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    password = _encode(plain_password)
    if not password:
        raise CredentialHashError("Password is empty.")
    try:
        return bcrypt.hashpw(password, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")
    except ValueError as exc:
        raise CredentialHashError("Password could not be hashed.") from exc


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = _encode(plain_password)
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


async def hash_password_async(plain_password: str) -> str:
    return await run_in_threadpool(hash_password, plain_password)


async def verify_password_async(plain_password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, plain_password, password_hash)
