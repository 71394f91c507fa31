from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    vault_dir: Path
    base_path: str
    auth_mode: str
    auth_username: str | None
    auth_password: str | None
    session_cookie: str
    api_debug_log: bool
    log_level: str
    notes_page_limit_max: int


def load_settings() -> Settings:
    vault_dir = Path(os.environ.get("VAULT_DIR", "./vault")).resolve()
    base_path = "/" + os.environ.get("BASE_PATH", "/chaos").strip("/")
    auth_mode = os.environ.get("AUTH_MODE", "none").lower()
    auth_username = os.environ.get("AUTH_USERNAME")
    auth_password = os.environ.get("AUTH_PASSWORD")
    session_cookie = os.environ.get("SESSION_COOKIE", "chaos_session")
    api_debug_log = os.environ.get("API_DEBUG_LOG", "false").lower() == "true"
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    notes_page_limit_max = int(os.environ.get("NOTES_PAGE_LIMIT_MAX", "100"))
    return Settings(
        vault_dir=vault_dir,
        base_path=base_path,
        auth_mode=auth_mode,
        auth_username=auth_username,
        auth_password=auth_password,
        session_cookie=session_cookie,
        api_debug_log=api_debug_log,
        log_level=log_level,
        notes_page_limit_max=notes_page_limit_max,
    )
