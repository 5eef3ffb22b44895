"""
User API Tests
==============

What:  Registration rules, password storage and login.
"""

import pytest

from noteful.auth import verify_password
from noteful.models import User
from noteful.store import Collection

VALID_USER = {"fullname": "Ada Lovelace", "username": "ada", "password": "correcthorse"}


async def register(test_client, **overrides):
    return await test_client.post("/api/users", json={**VALID_USER, **overrides})


class TestRegistration:

    @pytest.mark.asyncio
    async def test_register_returns_public_user(self, test_client):
        response = await register(test_client)

        assert response.status_code == 201
        user = response.json()
        assert set(user) == {"id", "fullname", "username"}
        assert user["username"] == "ada"
        assert user["fullname"] == "Ada Lovelace"
        assert response.headers["Location"].endswith(f"/api/users/{user['id']}")

    @pytest.mark.asyncio
    async def test_password_is_stored_as_bcrypt_hash(self, test_client, db_session):
        user_id = (await register(test_client)).json()["id"]

        stored = await Collection(db_session, User).find_by_id(user_id)
        assert stored.password != VALID_USER["password"]
        assert stored.password.startswith("$2")
        assert verify_password(VALID_USER["password"], stored.password)

    @pytest.mark.asyncio
    async def test_fullname_is_optional_and_trimmed(self, test_client):
        response = await test_client.post(
            "/api/users", json={"username": "bob", "password": "password123"}
        )
        assert response.status_code == 201
        assert response.json()["fullname"] == ""

        response = await register(test_client, username="carol", fullname="  Carol  ")
        assert response.json()["fullname"] == "Carol"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["username", "password"])
    async def test_missing_required_field_is_400(self, test_client, field):
        body = {key: value for key, value in VALID_USER.items() if key != field}
        response = await test_client.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == f"Missing `{field}` in request body"
        assert response.json()["details"]["field"] == field

    @pytest.mark.asyncio
    async def test_no_body_is_400(self, test_client):
        response = await test_client.post("/api/users")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `username` in request body"

        response = await test_client.post("/api/login")
        assert response.status_code == 400
        assert response.json()["message"] == "Missing `username` in request body"

    @pytest.mark.asyncio
    async def test_non_string_field_is_400(self, test_client):
        response = await register(test_client, username=1234)

        assert response.status_code == 400
        assert response.json()["message"] == "Incorrect field type: expected string"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["username", "password"])
    async def test_surrounding_whitespace_is_400(self, test_client, field):
        response = await register(test_client, **{field: f" {VALID_USER[field]} "})

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot start or end with whitespace"

    @pytest.mark.asyncio
    async def test_short_password_is_400(self, test_client):
        response = await register(test_client, password="short")

        assert response.status_code == 400
        assert response.json()["message"] == "Must be at least 8 characters long"

    @pytest.mark.asyncio
    async def test_long_password_is_400(self, test_client):
        response = await register(test_client, password="x" * 73)

        assert response.status_code == 400
        assert response.json()["message"] == "Must be at most 72 characters long"

    @pytest.mark.asyncio
    async def test_duplicate_username_is_400(self, test_client):
        await register(test_client)
        response = await register(test_client, fullname="Someone Else")

        assert response.status_code == 400
        assert response.json()["message"] == "The username already exists"


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_with_correct_password(self, test_client):
        created = (await register(test_client)).json()

        response = await test_client.post(
            "/api/login", json={"username": "ada", "password": VALID_USER["password"]}
        )

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, test_client):
        await register(test_client)

        response = await test_client.post("/api/login", json={"username": "ada", "password": "wrongpass"})

        assert response.status_code == 401
        assert response.json()["message"] == "Incorrect username or password"

    @pytest.mark.asyncio
    async def test_unknown_user_is_401(self, test_client):
        response = await test_client.post("/api/login", json={"username": "nobody", "password": "whatever1"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_credentials_is_400(self, test_client):
        response = await test_client.post("/api/login", json={"username": "ada"})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `password` in request body"
