from __future__ import annotations

from fastapi.testclient import TestClient

from main import create_app


def _client(settings) -> TestClient:
    return TestClient(create_app(settings))


def test_note_lifecycle(settings) -> None:
    client = _client(settings)

    created = client.post("/chaos/api/notes", json={"title": "First"})
    assert created.status_code == 200
    note_id = created.json()["id"]

    r = client.get(f"/chaos/api/notes/{note_id}")
    assert r.status_code == 200
    data = r.json()
    assert data["title"] == "First"
    assert data["status"] is None
    assert data["tags"] == []
    assert data["content"] == f"---\nid: {note_id}\ntitle: First\n---\n\n"

    content = f"---\nid: {note_id}\ntitle: First\nstatus: done\ntags: [x, y]\n---\n\nLink [[{note_id}|me]]"
    assert client.put(f"/chaos/api/notes/{note_id}", json={"content": content}).status_code == 200
    assert client.post(f"/chaos/api/notes/{note_id}/rename", json={"title": "Renamed"}).status_code == 200

    data = client.get(f"/chaos/api/notes/{note_id}").json()
    assert data["title"] == "Renamed"
    assert data["status"] == "done"
    assert data["tags"] == ["x", "y"]
    assert data["body"] == f"Link [[{note_id}|me]]"
    assert data["resolvedBody"] == f"Link [me](/chaos/note/{note_id})"

    assert client.delete(f"/chaos/api/notes/{note_id}").status_code == 200
    missing = client.get(f"/chaos/api/notes/{note_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "note_not_found"}


def test_list_notes_pages(settings) -> None:
    client = _client(settings)
    for title in ["One", "Two", "Three"]:
        client.post("/chaos/api/notes", json={"title": title})

    page1 = client.get("/chaos/api/notes", params={"page": 1, "limit": 2}).json()
    assert page1["total"] == 3
    assert page1["hasMore"] is True
    assert len(page1["notes"]) == 2

    page2 = client.get("/chaos/api/notes", params={"page": 2, "limit": 2}).json()
    assert page2["hasMore"] is False
    assert len(page2["notes"]) == 1

    found = client.get("/chaos/api/notes", params={"search": "two"}).json()
    assert [n["title"] for n in found["notes"]] == ["Two"]


def test_mutation_errors_are_json(settings) -> None:
    client = _client(settings)

    r = client.post("/chaos/api/notes", json={"title": "  "})
    assert r.status_code == 400
    assert r.json() == {"error": "title_required"}

    note_id = client.post("/chaos/api/notes", json={"title": "Guarded"}).json()["id"]
    r = client.put(f"/chaos/api/notes/{note_id}", json={"content": "no frontmatter"})
    assert r.status_code == 400
    assert r.json() == {"error": "frontmatter_required"}

    r = client.post("/chaos/api/notes/not-a-valid-id/rename", json={"title": "x"})
    assert r.status_code == 404
    assert r.json()["error"] == "note_not_found"


def test_multi_line_title_is_rejected(settings) -> None:
    client = _client(settings)

    r = client.post("/chaos/api/notes", json={"title": "One\ntwo"})
    assert r.status_code == 400
    assert r.json() == {"error": "title_invalid"}

    note_id = client.post("/chaos/api/notes", json={"title": "Plan"}).json()["id"]
    r = client.post(f"/chaos/api/notes/{note_id}/rename", json={"title": "One\r\ntwo"})
    assert r.status_code == 400
    assert r.json() == {"error": "title_invalid"}

    r = client.get(f"/chaos/api/notes/{note_id}")
    assert r.status_code == 200
    assert r.json()["title"] == "Plan"


def test_auth_status_without_auth_mode(settings) -> None:
    client = _client(settings)
    assert client.get("/chaos/auth/status").json() == {"authenticated": True}
