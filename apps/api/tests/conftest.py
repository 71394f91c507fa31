import pytest

from chaos_api.config import Settings, load_settings


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    monkeypatch.setenv("VAULT_DIR", str(tmp_path))
    monkeypatch.delenv("BASE_PATH", raising=False)
    monkeypatch.delenv("AUTH_MODE", raising=False)
    return load_settings()
