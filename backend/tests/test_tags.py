"""
Tag API Tests
=============

What:  End-to-end tests for /api/tags against the seeded test database.

What we test:
    ✅ Listing is complete and sorted by name
    ✅ Malformed ids → 400, unknown ids → 404
    ✅ Create/rename enforce a present, unique name
    ✅ Delete pulls the tag from every note
"""

from datetime import datetime

import pytest

from noteful.seed import SEED_NOTES, SEED_TAGS

FOO = "222222222222222222222200"
BAR = "222222222222222222222201"
MISSING_ID = "990000000000000000000003"


def parse_stamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestListAndGetTags:

    @pytest.mark.asyncio
    async def test_list_returns_every_tag_sorted_by_name(self, test_client):
        response = await test_client.get("/api/tags")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == len(SEED_TAGS)
        assert [tag["name"] for tag in body] == ["bar", "baz", "foo", "qux"]
        for tag in body:
            assert set(tag) == {"id", "name", "createdAt", "updatedAt"}

    @pytest.mark.asyncio
    async def test_get_by_id(self, test_client):
        response = await test_client.get(f"/api/tags/{FOO}")

        assert response.status_code == 200
        assert response.json()["id"] == FOO
        assert response.json()["name"] == "foo"

    @pytest.mark.asyncio
    async def test_get_accepts_uppercase_hex(self, test_client):
        response = await test_client.get(f"/api/tags/{FOO.upper()}")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        response = await test_client.get("/api/tags/1")

        assert response.status_code == 400
        assert response.json()["message"] == "The `id` is invalid"
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        response = await test_client.get(f"/api/tags/{MISSING_ID}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestCreateTag:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_location(self, test_client):
        response = await test_client.post("/api/tags", json={"name": "urgent"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "urgent"
        assert len(body["id"]) == 24
        assert response.headers["Location"].endswith(f"/api/tags/{body['id']}")

        fetched = await test_client.get(f"/api/tags/{body['id']}")
        assert fetched.json()["name"] == "urgent"

    @pytest.mark.asyncio
    async def test_missing_name_is_400(self, test_client):
        response = await test_client.post("/api/tags", json={"foo": "bar"})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `name` from request body"

    @pytest.mark.asyncio
    async def test_no_body_is_400(self, test_client):
        response = await test_client.post("/api/tags")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `name` from request body"

    @pytest.mark.asyncio
    async def test_created_tag_reads_back_unchanged(self, test_client):
        created = (await test_client.post("/api/tags", json={"name": "urgent"})).json()
        fetched = (await test_client.get(f"/api/tags/{created['id']}")).json()

        assert fetched["id"] == created["id"]
        assert fetched["name"] == created["name"]
        assert parse_stamp(fetched["createdAt"]) == parse_stamp(created["createdAt"])
        assert parse_stamp(fetched["updatedAt"]) == parse_stamp(created["updatedAt"])

    @pytest.mark.asyncio
    async def test_duplicate_name_is_400(self, test_client):
        response = await test_client.post("/api/tags", json={"name": "foo"})

        assert response.status_code == 400
        assert response.json()["message"] == "This tag `name` already exist"

        listing = await test_client.get("/api/tags")
        assert len(listing.json()) == len(SEED_TAGS)


class TestUpdateTag:

    @pytest.mark.asyncio
    async def test_rename(self, test_client):
        response = await test_client.put(f"/api/tags/{FOO}", json={"name": "renamed"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == FOO
        assert body["name"] == "renamed"
        assert body["updatedAt"] > body["createdAt"]

    @pytest.mark.asyncio
    async def test_missing_name_is_400(self, test_client):
        response = await test_client.put(f"/api/tags/{FOO}", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `name` in request body"

    @pytest.mark.asyncio
    async def test_no_body_is_400(self, test_client):
        response = await test_client.put(f"/api/tags/{FOO}")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing `name` in request body"

    @pytest.mark.asyncio
    async def test_rename_to_existing_name_is_400(self, test_client):
        response = await test_client.put(f"/api/tags/{FOO}", json={"name": "bar"})

        assert response.status_code == 400
        assert response.json()["message"] == "This tag `name` already exist"

        unchanged = await test_client.get(f"/api/tags/{FOO}")
        assert unchanged.json()["name"] == "foo"

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        response = await test_client.put("/api/tags/nope", json={"name": "x"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        response = await test_client.put(f"/api/tags/{MISSING_ID}", json={"name": "x"})
        assert response.status_code == 404


class TestDeleteTag:

    @pytest.mark.asyncio
    async def test_delete_pulls_tag_from_notes(self, test_client):
        tagged = [note["id"] for note in SEED_NOTES if FOO in note["tags"]]
        assert tagged

        response = await test_client.delete(f"/api/tags/{FOO}")

        assert response.status_code == 204
        assert response.content == b""
        assert (await test_client.get(f"/api/tags/{FOO}")).status_code == 404

        by_tag = await test_client.get("/api/notes", params={"tagId": FOO})
        assert by_tag.json() == []
        for note_id in tagged:
            note = (await test_client.get(f"/api/notes/{note_id}")).json()
            assert FOO not in note["tags"]
            assert note["updatedAt"] > note["createdAt"]

    @pytest.mark.asyncio
    async def test_delete_keeps_other_tags(self, test_client):
        await test_client.delete(f"/api/tags/{FOO}")

        note = (await test_client.get("/api/notes/000000000000000000000001")).json()
        assert note["tags"] == [BAR]

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        response = await test_client.delete("/api/tags/1")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_id_is_404_and_changes_nothing(self, test_client):
        response = await test_client.delete(f"/api/tags/{MISSING_ID}")

        assert response.status_code == 404
        assert len((await test_client.get("/api/tags")).json()) == len(SEED_TAGS)
