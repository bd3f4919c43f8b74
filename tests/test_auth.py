# =============================================================================
# tests/test_auth.py - Registration & Login Tests
# =============================================================================

import pytest

from auth import security
from core.errors import CredentialHashError, StoreError


def _register(client, username="zed", email="zed@x.com", password="p@ss"):
    return client.post(
        "/api/register",
        json={"username": username, "email": email, "password": password},
    )


# =============================================================================
# Registration
# =============================================================================

class TestRegister:
    """Tests for POST /api/register."""

    def test_success_returns_user_without_password(self, client, fake_db):
        response = _register(client)

        assert response.status_code == 200
        body = response.json()
        assert body == {"id": 1, "username": "zed", "email": "zed@x.com"}
        # Stored hash is bcrypt, never the plaintext.
        stored = fake_db.users[0]["password_hash"]
        assert stored != "p@ss"
        assert stored.startswith("$2b$10$")

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "zed@x.com", "password": "p@ss"},
            {"username": "zed", "password": "p@ss"},
            {"username": "zed", "email": "zed@x.com"},
            {"username": "", "email": "zed@x.com", "password": "p@ss"},
            {},
        ],
    )
    def test_missing_fields(self, client, fake_db, payload):
        response = client.post("/api/register", json=payload)

        assert response.status_code == 400
        assert response.json() == {"signUpError": "Prosím, vyplňte všetky polia"}
        assert fake_db.sql_calls("INSERT INTO users") == []

    def test_duplicate_email(self, client):
        _register(client, username="zed", email="zed@x.com")

        response = _register(client, username="other", email="zed@x.com")

        assert response.status_code == 409
        assert response.json() == {"signUpError": "Užívateľské meno alebo email už existuje"}

    def test_duplicate_username(self, client):
        _register(client, username="zed", email="zed@x.com")

        response = _register(client, username="zed", email="other@x.com")

        assert response.status_code == 409

    def test_store_failure(self, client, fake_db):
        fake_db.fail_with = StoreError("08006", "connection lost")

        response = _register(client)

        assert response.status_code == 500
        assert response.json() == {
            "dbError": "Nie je možné zaregistrovať sa(Chyba databázy)",
            "details": "connection lost",
        }

    def test_hash_failure_is_500(self, client, fake_db, monkeypatch):
        def broken(_):
            raise CredentialHashError("boom")

        monkeypatch.setattr(security, "hash_password", broken)

        response = _register(client)

        assert response.status_code == 500
        assert "error" in response.json()
        assert fake_db.sql_calls("INSERT INTO users") == []

    def test_non_object_body(self, client, fake_db):
        response = client.post("/api/register", json=["zed"])

        assert response.status_code == 400
        assert response.json() == {"signUpError": "Prosím, vyplňte všetky polia"}
        assert fake_db.calls == []

    def test_non_string_field(self, client, fake_db):
        response = client.post(
            "/api/register",
            json={"username": 123, "email": "zed@x.com", "password": "p@ss"},
        )

        assert response.status_code == 400
        assert response.json() == {"signUpError": "Prosím, vyplňte všetky polia"}
        assert fake_db.sql_calls("INSERT INTO users") == []

    def test_long_password(self, client):
        response = _register(client, password="p" * 80)

        assert response.status_code == 200
        assert response.json()["username"] == "zed"


# =============================================================================
# Login
# =============================================================================

class TestLogin:
    """Tests for POST /api/login."""

    def test_register_then_login(self, client):
        registered = _register(client).json()

        response = client.post("/api/login", json={"email": "zed@x.com", "password": "p@ss"})

        assert response.status_code == 200
        assert response.json() == {"id": registered["id"], "username": "zed", "email": "zed@x.com"}

    def test_wrong_password(self, client):
        _register(client)

        response = client.post("/api/login", json={"email": "zed@x.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"loginError": "Nesprávne heslo"}

    def test_unknown_email(self, client):
        response = client.post("/api/login", json={"email": "nobody@x.com", "password": "p@ss"})

        assert response.status_code == 401
        assert response.json() == {"loginError": "Nesprávny email"}

    def test_long_password(self, client):
        _register(client, password="p" * 80)

        ok = client.post("/api/login", json={"email": "zed@x.com", "password": "p" * 80})
        wrong = client.post("/api/login", json={"email": "zed@x.com", "password": "q" * 80})

        assert ok.status_code == 200
        assert wrong.status_code == 401

    def test_non_object_body(self, client, fake_db):
        response = client.post("/api/login", json=["zed@x.com", "p@ss"])

        assert response.status_code == 401
        assert response.json() == {"loginError": "Nesprávny email"}

    def test_store_failure(self, client, fake_db):
        fake_db.fail_with = StoreError("TIMEOUT", "Database operation timed out.")

        response = client.post("/api/login", json={"email": "zed@x.com", "password": "p@ss"})

        assert response.status_code == 500
        assert response.json()["dbError"] == "Nie je možné prihlásiť sa"


# =============================================================================
# Password hashing
# =============================================================================

class TestSecurity:
    """Tests for auth.security."""

    def test_hash_and_verify(self):
        hashed = security.hash_password("p@ss")

        assert security.verify_password("p@ss", hashed)
        assert not security.verify_password("wrong", hashed)

    def test_salted(self):
        assert security.hash_password("p@ss") != security.hash_password("p@ss")

    def test_empty_password_raises(self):
        with pytest.raises(CredentialHashError):
            security.hash_password("")

    def test_long_password_truncated_to_72_bytes(self):
        hashed = security.hash_password("p" * 80)

        assert security.verify_password("p" * 80, hashed)
        assert security.verify_password("p" * 72 + "x" * 8, hashed)
        assert not security.verify_password("p" * 71, hashed)

    def test_malformed_hash_is_mismatch(self):
        assert security.verify_password("p@ss", "not-a-bcrypt-hash") is False
        assert security.verify_password("p@ss", "") is False
