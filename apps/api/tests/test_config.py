from chaos_api.config import load_settings


def test_defaults(tmp_path, monkeypatch) -> None:
    for name in ("BASE_PATH", "AUTH_MODE", "SESSION_COOKIE", "LOG_LEVEL", "NOTES_PAGE_LIMIT_MAX"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("VAULT_DIR", str(tmp_path))

    settings = load_settings()
    assert settings.vault_dir == tmp_path.resolve()
    assert settings.base_path == "/chaos"
    assert settings.auth_mode == "none"
    assert settings.session_cookie == "chaos_session"
    assert settings.notes_page_limit_max == 100


def test_base_path_is_normalized(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("VAULT_DIR", str(tmp_path))
    monkeypatch.setenv("BASE_PATH", "notes/")
    monkeypatch.setenv("AUTH_MODE", "SESSION")
    settings = load_settings()
    assert settings.base_path == "/notes"
    assert settings.auth_mode == "session"
