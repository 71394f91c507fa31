import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from chaos_api.config import Settings
from chaos_api.dependencies import get_session_token, get_sessions, get_settings, get_vault
from chaos_api.domain.exceptions import NoteExistsError, NoteNotFoundError, NoteValidationError
from chaos_api.domain.schemas import (
    AuthStatusOut,
    LoginIn,
    NoteCreateIn,
    NoteCreateOut,
    NoteDetailOut,
    NoteListOut,
    NoteRenameIn,
    NoteSummaryOut,
    NoteUpdateIn,
    OkOut,
)
from chaos_api.sessions import SessionStore
from chaos_api.vault import NoteVault

health_router = APIRouter()
auth_router = APIRouter(prefix="/auth")
notes_router = APIRouter(prefix="/api/notes")
logger = logging.getLogger("chaos.api")


def _rid(request: Request) -> str:
    return getattr(request.state, "request_id", "")


@health_router.get("/health")
def health():
    return {"ok": True}


@auth_router.get("/status", response_model=AuthStatusOut)
def auth_status(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_sessions),
):
    return AuthStatusOut(authenticated=sessions.is_authenticated(token))


@auth_router.post("/login", response_model=OkOut)
def login(
    payload: LoginIn,
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    token = sessions.login(payload.username, payload.password)
    if token is None:
        logger.info("login_failed", extra={"rid": _rid(request)})
        raise HTTPException(status_code=401, detail="Invalid credentials")
    response.set_cookie(settings.session_cookie, token, httponly=True, samesite="lax", path="/")
    logger.info("login", extra={"rid": _rid(request)})
    return OkOut()


@auth_router.post("/logout", response_model=OkOut)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    sessions.logout(token)
    response.delete_cookie(settings.session_cookie, path="/")
    return OkOut()


@notes_router.get("", response_model=NoteListOut)
def list_notes(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    search: Optional[str] = None,
    vault: NoteVault = Depends(get_vault),
    settings: Settings = Depends(get_settings),
):
    result = vault.list_page(page, min(limit, settings.notes_page_limit_max), search)
    return NoteListOut(
        notes=[NoteSummaryOut(**n.__dict__) for n in result.notes],
        total=result.total,
        hasMore=result.has_more,
    )


@notes_router.post("", response_model=NoteCreateOut)
def create_note(
    payload: NoteCreateIn,
    request: Request,
    vault: NoteVault = Depends(get_vault),
):
    try:
        note = vault.create_note(payload.title)
    except NoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except NoteExistsError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    logger.info("note_create", extra={"rid": _rid(request), "id": note.id})
    return NoteCreateOut(id=note.id)


@notes_router.get("/{note_id}", response_model=NoteDetailOut)
def get_note(note_id: str, vault: NoteVault = Depends(get_vault)):
    try:
        detail = vault.read_note_detail(note_id)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail="note_not_found") from e
    return NoteDetailOut(**detail.__dict__)


@notes_router.put("/{note_id}", response_model=OkOut)
def update_note(
    note_id: str,
    payload: NoteUpdateIn,
    request: Request,
    vault: NoteVault = Depends(get_vault),
):
    try:
        vault.write_note(note_id, payload.content)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail="note_not_found") from e
    except NoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    logger.info("note_update", extra={"rid": _rid(request), "id": note_id})
    return OkOut()


@notes_router.post("/{note_id}/rename", response_model=OkOut)
def rename_note(
    note_id: str,
    payload: NoteRenameIn,
    request: Request,
    vault: NoteVault = Depends(get_vault),
):
    try:
        vault.rename_note(note_id, payload.title)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail="note_not_found") from e
    except NoteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    logger.info("note_rename", extra={"rid": _rid(request), "id": note_id})
    return OkOut()


@notes_router.delete("/{note_id}", response_model=OkOut)
def delete_note(
    note_id: str,
    request: Request,
    vault: NoteVault = Depends(get_vault),
):
    try:
        path = vault.delete_note(note_id)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail="note_not_found") from e
    logger.info("note_delete", extra={"rid": _rid(request), "id": note_id, "path": path})
    return OkOut()
