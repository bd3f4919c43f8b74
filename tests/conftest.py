# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Provides an in-memory stand-in for the database gateway and a TestClient
# wired to it through create_app(database=...). No PostgreSQL is needed.
# =============================================================================

import os

# Set before importing the app: CORS origins are read at app build time.
os.environ.setdefault("CORS_ORIGINS", "*")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from core.errors import StoreError
from main import create_app


# =============================================================================
# Fake gateway
# =============================================================================

class FakeDatabase:
    """
    Mimics core.db.Database for the handful of statements the API issues.

    Users and observations are kept in memory; listing queries return
    `listing_rows` as-is. Every call is recorded in `calls`.
    """

    def __init__(self):
        self.users = []
        self.observations = []
        self.listing_rows = []
        self.calls = []
        self.fail_with = None
        self.connected = False
        self.closed = False

    async def connect(self):
        self.connected = True

    async def close(self):
        self.closed = True

    async def ping(self):
        await self.fetch_one("SELECT 1 AS ok")

    async def execute(self, sql, *args):
        await self.fetch_all(sql, *args)
        return "OK"

    async def fetch_one(self, sql, *args):
        rows = await self.fetch_all(sql, *args)
        return rows[0] if rows else None

    async def fetch_all(self, sql, *args):
        self.calls.append((sql, args))
        if self.fail_with is not None:
            raise self.fail_with

        if "SELECT 1" in sql:
            return [{"ok": 1}]
        if "INSERT INTO users" in sql:
            return [self._insert_user(*args)]
        if "FROM users" in sql and "email = $1" in sql:
            return [dict(u) for u in self.users if u["email"] == args[0]]
        if "FROM users" in sql and "id = $1" in sql:
            return [{"id": u["id"]} for u in self.users if u["id"] == args[0]]
        if "INSERT INTO observations" in sql:
            return [self._upsert_observation(*args)]
        return [dict(r) for r in self.listing_rows]

    def _insert_user(self, username, email, password_hash):
        for user in self.users:
            if user["username"] == username or user["email"] == email:
                raise StoreError("23505", "duplicate key value violates unique constraint")
        user = {
            "id": len(self.users) + 1,
            "username": username,
            "email": email,
            "password_hash": password_hash,
        }
        self.users.append(user)
        return {"id": user["id"], "username": username, "email": email}

    def _upsert_observation(self, observation_date, location_name, species_id, spacecraft_type, user_id):
        for row in self.observations:
            if row["user_id"] == user_id:
                row["observation_date"] = observation_date
                row["location_name"] = location_name
                row["spacecraft_type"] = spacecraft_type
                return {"id": row["id"], "inserted": False}
        row = {
            "id": len(self.observations) + 1,
            "observation_date": observation_date,
            "location_name": location_name,
            "species_id": species_id,
            "spacecraft_type": spacecraft_type,
            "user_id": user_id,
        }
        self.observations.append(row)
        return {"id": row["id"], "inserted": True}

    def add_user(self, user_id, username="zed", email="zed@x.com"):
        self.users.append(
            {"id": user_id, "username": username, "email": email, "password_hash": "x"}
        )

    def sql_calls(self, fragment):
        return [(sql, args) for sql, args in self.calls if fragment in sql]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def client(fake_db):
    app = create_app(database=fake_db)
    with TestClient(app) as test_client:
        # Drop the startup probe so tests only see their own queries.
        fake_db.calls.clear()
        yield test_client
