from __future__ import annotations

import logging
from typing import Any

import httpx

from chaos_api.domain.schemas import NoteCreateOut, NoteDetailOut, NoteListOut

logger = logging.getLogger("chaos.client")


class NotesApiError(RuntimeError):
    """A failed request. ``str(err)`` is the message to show the user."""


def _error_message(resp: httpx.Response, fallback: str) -> str:
    try:
        data = resp.json()
    except ValueError:
        return fallback
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return fallback


class NotesClient:
    def __init__(
        self,
        base_url: str,
        *,
        base_path: str = "/chaos",
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_path = "/" + base_path.strip("/")
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout_s, transport=transport)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> NotesClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, fallback: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_path}{path}"
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("request_failed", extra={"method": method, "url": url, "error": type(e).__name__})
            raise NotesApiError(fallback) from e
        if resp.status_code >= 400:
            message = _error_message(resp, fallback)
            logger.info("request_rejected", extra={"method": method, "url": url, "status": resp.status_code})
            raise NotesApiError(message)
        return resp

    async def check_auth(self) -> bool:
        resp = await self._request("GET", "/auth/status", "Failed to check session")
        return bool(resp.json().get("authenticated"))

    async def login(self, username: str, password: str) -> bool:
        try:
            await self._request("POST", "/auth/login", "Invalid credentials", json={"username": username, "password": password})
        except NotesApiError:
            return False
        return True

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout", "Failed to log out")

    async def get_notes(self, page: int, limit: int, search: str = "") -> NoteListOut:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        resp = await self._request("GET", "/api/notes", "Failed to fetch notes", params=params)
        return NoteListOut.model_validate(resp.json())

    async def get_note(self, note_id: str) -> NoteDetailOut:
        resp = await self._request("GET", f"/api/notes/{note_id}", "Failed to fetch note")
        return NoteDetailOut.model_validate(resp.json())

    async def create_note(self, title: str) -> str:
        resp = await self._request("POST", "/api/notes", "Failed to create note", json={"title": title})
        return NoteCreateOut.model_validate(resp.json()).id

    async def update_note(self, note_id: str, content: str) -> None:
        await self._request("PUT", f"/api/notes/{note_id}", "Failed to update note", json={"content": content})

    async def rename_note(self, note_id: str, title: str) -> None:
        await self._request("POST", f"/api/notes/{note_id}/rename", "Failed to rename note", json={"title": title})

    async def delete_note(self, note_id: str) -> None:
        await self._request("DELETE", f"/api/notes/{note_id}", "Failed to delete note")
