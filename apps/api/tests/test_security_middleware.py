from __future__ import annotations

from fastapi.testclient import TestClient


def test_request_id_header_present(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("VAULT_DIR", str(tmp_path))
    from main import create_app

    client = TestClient(create_app())
    r = client.get("/health")
    assert r.status_code == 200
    assert r.headers.get("x-request-id")


def test_session_auth_blocks_until_login(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("VAULT_DIR", str(tmp_path))
    monkeypatch.setenv("AUTH_MODE", "session")
    monkeypatch.setenv("AUTH_USERNAME", "me")
    monkeypatch.setenv("AUTH_PASSWORD", "secret")

    from main import create_app

    client = TestClient(create_app())

    # Health and the auth endpoints stay reachable.
    assert client.get("/health").status_code == 200
    assert client.get("/chaos/auth/status").json() == {"authenticated": False}

    r1 = client.get("/chaos/api/notes")
    assert r1.status_code == 401
    assert r1.json() == {"error": "unauthorized"}

    bad = client.post("/chaos/auth/login", json={"username": "me", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid credentials"}

    ok = client.post("/chaos/auth/login", json={"username": "me", "password": "secret"})
    assert ok.status_code == 200
    assert client.get("/chaos/auth/status").json() == {"authenticated": True}
    assert client.get("/chaos/api/notes").status_code == 200

    assert client.post("/chaos/auth/logout").status_code == 200
    assert client.get("/chaos/api/notes").status_code == 401
