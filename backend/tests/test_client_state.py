"""
API Client Tests
================

What:  NotefulClient against a canned transport, and the NotefulState it
       updates.
How:   httpx.MockTransport answers from an in-memory table, so no server
       or database is involved.
"""

import json

import httpx
import pytest

from noteful.client import NotefulAPIError, NotefulClient, NotefulState

FOLDERS = [{"id": "111111111111111111111100", "name": "Archive"}]
TAGS = [{"id": "222222222222222222222200", "name": "foo"}]
NOTES = [
    {
        "id": "000000000000000000000003",
        "title": "7 things Lady Gaga has in common with cats",
        "content": "",
        "folderId": "111111111111111111111100",
        "tags": ["222222222222222222222200"],
    },
    {
        "id": "000000000000000000000004",
        "title": "The most incredible article about cats you'll ever read",
        "content": "",
        "folderId": None,
        "tags": [],
    },
]


class FakeAPI:
    """Records requests and answers the handful of routes the client uses."""

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/api/folders":
            return httpx.Response(200, json=FOLDERS)
        if request.method == "GET" and path == "/api/tags":
            return httpx.Response(200, json=TAGS)
        if request.method == "GET" and path == "/api/notes":
            term = request.url.params.get("searchTerm", "").lower()
            return httpx.Response(200, json=[n for n in NOTES if term in n["title"].lower()])
        if request.method == "GET" and path.startswith("/api/notes/"):
            note_id = path.rsplit("/", 1)[-1]
            for note in NOTES:
                if note["id"] == note_id:
                    return httpx.Response(200, json=note)
            return httpx.Response(404, json={"error": "not_found", "message": "note was not found"})
        if request.method == "POST" and path == "/api/notes":
            body = json.loads(request.content)
            return httpx.Response(201, json={"id": "000000000000000000000099", **body})
        if request.method == "DELETE" and path.startswith("/api/notes/"):
            return httpx.Response(204)
        if request.method == "POST" and path == "/api/login":
            body = json.loads(request.content)
            if body["password"] == "correcthorse":
                return httpx.Response(200, json={"id": "1" * 24, "fullname": "", "username": body["username"]})
            return httpx.Response(401, json={"error": "unauthorized", "message": "Incorrect username or password"})
        return httpx.Response(404, json={"error": "not_found", "message": "Not Found"})


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def client(fake_api):
    with NotefulClient("http://noteful.test", transport=httpx.MockTransport(fake_api)) as client:
        yield client


class TestNotefulState:

    def test_fresh_state(self):
        state = NotefulState()

        assert state.notes == []
        assert state.current_note == {}
        assert state.current_query == {"searchTerm": ""}
        assert state.auth_token == ""

    def test_instances_do_not_share_lists(self):
        first, second = NotefulState(), NotefulState()
        first.notes.append({"id": "x"})

        assert second.notes == []

    def test_lookups(self):
        state = NotefulState(notes=list(NOTES), folders=list(FOLDERS), tags=list(TAGS))

        assert state.find_note("000000000000000000000004")["folderId"] is None
        assert state.find_note("missing") is None
        assert state.folder_name("111111111111111111111100") == "Archive"
        assert state.folder_name(None) is None
        assert state.tag_names(["222222222222222222222200", "unknown"]) == ["foo"]

    def test_reset_keeps_auth_token(self):
        state = NotefulState(notes=list(NOTES), auth_token="ada")
        state.reset()

        assert state.notes == []
        assert state.auth_token == "ada"


class TestNotefulClient:

    def test_refresh_all_fills_state(self, client):
        state = NotefulState()
        client.refresh_all(state)

        assert state.folders == FOLDERS
        assert state.tags == TAGS
        assert len(state.notes) == 2

    def test_search_sets_query_and_reloads(self, client, fake_api):
        state = NotefulState()
        client.search(state, searchTerm="gaga")

        assert state.current_query == {"searchTerm": "gaga"}
        assert [note["id"] for note in state.notes] == ["000000000000000000000003"]
        assert fake_api.requests[-1].url.params["searchTerm"] == "gaga"

    def test_empty_query_values_are_not_sent(self, client, fake_api):
        client.refresh_notes(NotefulState())

        assert "searchTerm" not in fake_api.requests[-1].url.params

    def test_open_note(self, client):
        state = NotefulState()
        client.open_note(state, "000000000000000000000003")

        assert state.current_note["title"].startswith("7 things")

    def test_save_new_note_becomes_current(self, client):
        state = NotefulState()
        saved = client.save_note(state, {"title": "Fresh", "content": "text"})

        assert saved["id"] == "000000000000000000000099"
        assert state.current_note == saved

    def test_remove_current_note_clears_it(self, client):
        state = NotefulState(current_note=dict(NOTES[0]))
        client.remove_note(state, NOTES[0]["id"])

        assert state.current_note == {}

    def test_error_response_raises_with_message(self, client):
        with pytest.raises(NotefulAPIError) as exc_info:
            client.get_note("990000000000000000000003")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "note was not found"

    def test_sign_in(self, client):
        state = NotefulState()
        client.sign_in(state, "ada", "correcthorse")
        assert state.auth_token == "ada"

        with pytest.raises(NotefulAPIError) as exc_info:
            client.sign_in(NotefulState(), "ada", "wrong")
        assert exc_info.value.status_code == 401
