"""
Noteful Backend: API Client
===========================

What:  A small synchronous client for the Noteful REST API together with an
       explicit application-state object.
How:   `NotefulState` holds what a UI renders (notes, folders, tags, the
       open note, the active search). `NotefulClient` wraps httpx.Client;
       its `refresh_*` / `open_note` / `search` methods call the API and
       write the results into the state instance they are given.
Who:   Scripts and UIs that talk to a running server; the test suite drives
       it through httpx.MockTransport.

Example:
    state = NotefulState()
    with NotefulClient("http://localhost:8080") as client:
        client.refresh_all(state)
        client.search(state, searchTerm="gaga")
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

# Query keys the notes listing accepts
QUERY_KEYS = ("searchTerm", "folderId", "tagId")


class NotefulAPIError(Exception):
    """A non-2xx answer from the API, carrying its status and error body."""

    def __init__(self, status_code: int, message: str, body: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.message = message
        self.body = body or {}
        super().__init__(f"{status_code}: {message}")


@dataclass
class NotefulState:
    """Client-side application state; one instance per UI session."""

    notes: List[Dict[str, Any]] = field(default_factory=list)
    folders: List[Dict[str, Any]] = field(default_factory=list)
    tags: List[Dict[str, Any]] = field(default_factory=list)
    current_note: Dict[str, Any] = field(default_factory=dict)
    current_query: Dict[str, str] = field(default_factory=lambda: {"searchTerm": ""})
    auth_token: str = ""

    def find_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        return next((note for note in self.notes if note["id"] == note_id), None)

    def folder_name(self, folder_id: Optional[str]) -> Optional[str]:
        folder = next((f for f in self.folders if f["id"] == folder_id), None)
        return folder["name"] if folder else None

    def tag_names(self, tag_ids: List[str]) -> List[str]:
        names = {tag["id"]: tag["name"] for tag in self.tags}
        return [names[tag_id] for tag_id in tag_ids if tag_id in names]

    def reset(self) -> None:
        """Back to the state of a fresh session; the auth token is kept."""
        self.notes = []
        self.folders = []
        self.tags = []
        self.current_note = {}
        self.current_query = {"searchTerm": ""}


class NotefulClient:
    """
    Thin wrapper over the Noteful HTTP API.

    Raw resource calls (list_notes, create_tag, ...) return decoded JSON.
    State-aware calls take a NotefulState and update it in place.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "NotefulClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ══════════════════════════════════════════════════════════════════════
    # Transport
    # ══════════════════════════════════════════════════════════════════════

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self._http.request(method, path, **kwargs)
        rid = response.headers.get("X-Request-ID", "")
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") or response.reason_phrase
            logger.warning("%s %s → %d [%s] %s", method, path, response.status_code, rid, message)
            raise NotefulAPIError(response.status_code, message, body)
        logger.debug("%s %s → %d [%s]", method, path, response.status_code, rid)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ══════════════════════════════════════════════════════════════════════
    # Resources
    # ══════════════════════════════════════════════════════════════════════

    def list_notes(self, **query: str) -> List[Dict[str, Any]]:
        params = {key: value for key, value in query.items() if key in QUERY_KEYS and value}
        return self._request("GET", "/api/notes", params=params)

    def get_note(self, note_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/notes/{note_id}")

    def create_note(self, note: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/notes", json=note)

    def update_note(self, note_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/notes/{note_id}", json=changes)

    def delete_note(self, note_id: str) -> None:
        self._request("DELETE", f"/api/notes/{note_id}")

    def list_folders(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/folders")

    def create_folder(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/api/folders", json={"name": name})

    def delete_folder(self, folder_id: str) -> None:
        self._request("DELETE", f"/api/folders/{folder_id}")

    def list_tags(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/tags")

    def create_tag(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/api/tags", json={"name": name})

    def delete_tag(self, tag_id: str) -> None:
        self._request("DELETE", f"/api/tags/{tag_id}")

    def register(self, username: str, password: str, fullname: str = "") -> Dict[str, Any]:
        return self._request(
            "POST", "/api/users",
            json={"fullname": fullname, "username": username, "password": password},
        )

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/api/login", json={"username": username, "password": password})

    # ══════════════════════════════════════════════════════════════════════
    # State-aware operations
    # ══════════════════════════════════════════════════════════════════════

    def refresh_notes(self, state: NotefulState) -> None:
        """Reload notes for the state's current query."""
        state.notes = self.list_notes(**state.current_query)

    def refresh_folders(self, state: NotefulState) -> None:
        state.folders = self.list_folders()

    def refresh_tags(self, state: NotefulState) -> None:
        state.tags = self.list_tags()

    def refresh_all(self, state: NotefulState) -> None:
        self.refresh_folders(state)
        self.refresh_tags(state)
        self.refresh_notes(state)

    def search(self, state: NotefulState, **query: str) -> None:
        """Replace the current query and reload the matching notes."""
        state.current_query = {key: value for key, value in query.items() if key in QUERY_KEYS}
        state.current_query.setdefault("searchTerm", "")
        self.refresh_notes(state)

    def open_note(self, state: NotefulState, note_id: str) -> None:
        state.current_note = self.get_note(note_id)

    def save_note(self, state: NotefulState, note: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create or update a note, make it current and reload the list.

        A note with an `id` is updated with the remaining fields.
        """
        changes = {key: value for key, value in note.items() if key != "id"}
        if note.get("id"):
            saved = self.update_note(note["id"], changes)
        else:
            saved = self.create_note(changes)
        state.current_note = saved
        self.refresh_notes(state)
        return saved

    def remove_note(self, state: NotefulState, note_id: str) -> None:
        self.delete_note(note_id)
        if state.current_note.get("id") == note_id:
            state.current_note = {}
        self.refresh_notes(state)

    def sign_in(self, state: NotefulState, username: str, password: str) -> Dict[str, Any]:
        """
        Check credentials and record the signed-in username.

        The server issues no token; `auth_token` holds the username so a UI
        can tell whether someone is signed in.
        """
        user = self.login(username, password)
        state.auth_token = user["username"]
        return user
