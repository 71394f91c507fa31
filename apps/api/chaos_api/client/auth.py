from __future__ import annotations

import logging
from dataclasses import dataclass

from .api import NotesApiError, NotesClient

logger = logging.getLogger("chaos.client")


@dataclass
class AuthState:
    """Process-scoped login status.

    Resolved once by :meth:`check` at startup and then changed only through
    :meth:`login` and :meth:`logout`; nothing re-reads it from the server.
    """

    authenticated: bool

    @classmethod
    async def check(cls, client: NotesClient) -> AuthState:
        try:
            authenticated = await client.check_auth()
        except NotesApiError:
            logger.warning("auth_check_failed")
            authenticated = False
        return cls(authenticated=authenticated)

    async def login(self, client: NotesClient, username: str, password: str) -> bool:
        self.authenticated = await client.login(username, password)
        return self.authenticated

    async def logout(self, client: NotesClient) -> None:
        await client.logout()
        self.authenticated = False
