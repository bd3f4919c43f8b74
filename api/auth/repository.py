"""
User persistence helpers.
"""

from __future__ import annotations

from core.db import Database


async def create_user(db: Database, *, username: str, email: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (username, email, password_hash)
        VALUES ($1, $2, $3)
        RETURNING id, username, email
        """,
        username,
        email,
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_email(db: Database, email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, email, password_hash
        FROM users
        WHERE email = $1
        """,
        email,
    )


async def user_exists(db: Database, user_id: int) -> bool:
    row = await db.fetch_one(
        """
        SELECT id
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
    return row is not None
