from __future__ import annotations

import hmac
import secrets

from .config import Settings


class SessionStore:
    """In-memory login sessions keyed by an opaque cookie token."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._tokens: set[str] = set()

    @property
    def enabled(self) -> bool:
        return self.settings.auth_mode == "session"

    def check_credentials(self, username: str, password: str) -> bool:
        expected_user = self.settings.auth_username or ""
        expected_password = self.settings.auth_password or ""
        if not expected_user or not expected_password:
            return False
        user_ok = hmac.compare_digest(username.encode("utf-8"), expected_user.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), expected_password.encode("utf-8"))
        return user_ok and password_ok

    def login(self, username: str, password: str) -> str | None:
        if not self.check_credentials(username, password):
            return None
        token = secrets.token_urlsafe(32)
        self._tokens.add(token)
        return token

    def logout(self, token: str | None) -> None:
        if token:
            self._tokens.discard(token)

    def is_authenticated(self, token: str | None) -> bool:
        if not self.enabled:
            return True
        return bool(token) and token in self._tokens
