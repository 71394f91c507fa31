from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NoteStatus = Literal["building", "done"]

NOTE_STATUSES: tuple[str, ...] = ("building", "done")


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    status: str | None = None
    tags: tuple[str, ...] = ()
    body: str = ""


@dataclass(frozen=True)
class NoteSummary:
    id: str
    title: str
    status: str | None
    tags: list[str]
    filename: str
    mtime: float


@dataclass(frozen=True)
class NoteDetail:
    id: str
    title: str
    status: str | None
    tags: list[str]
    filename: str
    mtime: float
    content: str
    body: str
    resolvedBody: str
