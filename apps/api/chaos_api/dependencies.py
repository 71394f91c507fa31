from fastapi import Request

from chaos_api.config import Settings
from chaos_api.sessions import SessionStore
from chaos_api.vault import NoteVault


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_vault(request: Request) -> NoteVault:
    return request.app.state.vault


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session_token(request: Request) -> str | None:
    settings: Settings = request.app.state.settings
    return request.cookies.get(settings.session_cookie)
