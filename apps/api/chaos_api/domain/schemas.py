from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class NoteSummaryOut(BaseModel):
    id: str
    title: str
    status: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    filename: str = ""
    mtime: float = 0.0


class NoteDetailOut(NoteSummaryOut):
    content: str
    body: str
    resolvedBody: str


class NoteListOut(BaseModel):
    notes: list[NoteSummaryOut] = Field(default_factory=list)
    total: int
    hasMore: bool


class NoteCreateIn(BaseModel):
    title: str


class NoteCreateOut(BaseModel):
    id: str


class NoteUpdateIn(BaseModel):
    content: str


class NoteRenameIn(BaseModel):
    title: str


class LoginIn(BaseModel):
    username: str
    password: str


class AuthStatusOut(BaseModel):
    authenticated: bool


class OkOut(BaseModel):
    ok: bool = True
