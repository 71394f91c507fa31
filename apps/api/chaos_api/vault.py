from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path, PurePosixPath

from .domain.entities import Note, NoteDetail, NoteSummary
from .domain.exceptions import NoteExistsError, NoteNotFoundError, NoteValidationError
from .domain.frontmatter import FrontmatterParse, note_from_parse, parse_frontmatter, serialize_note
from .domain.identifier import is_valid_note_id, new_note_id
from .domain.links import DEFAULT_BASE_PATH, resolve_internal_links
from .util import atomic_write_text, normalize_newlines, safe_filename_stem

logger = logging.getLogger("chaos.vault")


def _clean_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise NoteValidationError("title_required")
    if "\n" in title or "\r" in title:
        raise NoteValidationError("title_invalid")
    return title


@dataclass(frozen=True)
class NotePage:
    notes: list[NoteSummary]
    total: int
    has_more: bool


@dataclass(frozen=True)
class _StoredNote:
    path: str
    content: str
    parsed: FrontmatterParse
    note: Note
    mtime: float


class NoteVault:
    """Notes stored as one markdown file each, named after the title.

    The note id lives in the frontmatter, so a rename only moves the file.
    """

    def __init__(self, vault_dir: Path, base_path: str = DEFAULT_BASE_PATH) -> None:
        self.vault_dir = vault_dir
        self.base_path = base_path

    def _abs_path(self, note_path: str) -> Path:
        return (self.vault_dir / PurePosixPath(note_path)).resolve()

    def list_paths(self) -> list[str]:
        if not self.vault_dir.exists():
            return []
        return sorted(p.name for p in self.vault_dir.glob("*.md") if not p.name.startswith("."))

    def _load(self, note_path: str) -> _StoredNote:
        abs_path = self._abs_path(note_path)
        content = abs_path.read_text(encoding="utf-8")
        parsed = parse_frontmatter(content)
        if parsed.error:
            logger.warning("frontmatter_degraded", extra={"path": note_path, "error": parsed.error})
        return _StoredNote(
            path=note_path,
            content=content,
            parsed=parsed,
            note=note_from_parse(parsed),
            mtime=abs_path.stat().st_mtime,
        )

    def _stored_notes(self) -> list[_StoredNote]:
        stored: list[_StoredNote] = []
        for note_path in self.list_paths():
            try:
                stored.append(self._load(note_path))
            except (OSError, UnicodeDecodeError):
                logger.warning("note_unreadable", extra={"path": note_path})
        return stored

    def _find(self, note_id: str) -> _StoredNote:
        if not is_valid_note_id(note_id):
            raise NoteNotFoundError(note_id)
        for stored in self._stored_notes():
            if stored.note.id == note_id:
                return stored
        raise NoteNotFoundError(note_id)

    def _summary(self, stored: _StoredNote) -> NoteSummary:
        note = stored.note
        return NoteSummary(
            id=note.id,
            title=note.title,
            status=note.status,
            tags=list(note.tags),
            filename=stored.path,
            mtime=stored.mtime,
        )

    def list_summaries(self, search: str | None = None) -> list[NoteSummary]:
        needle = search.strip().lower() if search else None
        items: list[tuple[float, str, NoteSummary]] = []
        for stored in self._stored_notes():
            if not is_valid_note_id(stored.note.id):
                continue
            if needle and needle not in stored.note.title.lower() and needle not in stored.note.body.lower():
                continue
            items.append((stored.mtime, stored.path, self._summary(stored)))
        items.sort(key=lambda it: (-it[0], it[1]))
        return [summary for _mtime, _path, summary in items]

    def list_page(self, page: int, limit: int, search: str | None = None) -> NotePage:
        items = self.list_summaries(search)
        start = (page - 1) * limit
        return NotePage(notes=items[start : start + limit], total=len(items), has_more=start + limit < len(items))

    def read_note_detail(self, note_id: str) -> NoteDetail:
        stored = self._find(note_id)
        summary = self._summary(stored)
        return NoteDetail(
            **summary.__dict__,
            content=stored.content,
            body=stored.note.body,
            resolvedBody=resolve_internal_links(stored.note.body, self.base_path),
        )

    def generate_path(self, title: str, keep: str | None = None) -> str:
        stem = safe_filename_stem(title)
        candidate = f"{stem}.md"
        idx = 2
        while candidate != keep and self._abs_path(candidate).exists():
            candidate = f"{stem}-{idx}.md"
            idx += 1
        return candidate

    def create_note(self, title: str) -> Note:
        title = _clean_title(title)
        existing = {stored.note.id for stored in self._stored_notes()}
        note_id = new_note_id()
        while note_id in existing:
            note_id = new_note_id()
        note = Note(id=note_id, title=title)
        note_path = self.generate_path(title)
        abs_path = self._abs_path(note_path)
        if abs_path.exists():
            raise NoteExistsError(note_path)
        atomic_write_text(abs_path, serialize_note(note))
        logger.info("note_created", extra={"id": note_id, "path": note_path})
        return note

    def write_note(self, note_id: str, content: str) -> Note:
        stored = self._find(note_id)
        content = normalize_newlines(content)
        parsed = parse_frontmatter(content)
        if parsed.error or not parsed.frontmatter:
            raise NoteValidationError("frontmatter_required")
        note = note_from_parse(parsed)
        if note.id != note_id:
            raise NoteValidationError("id_mismatch")
        if not note.title.strip():
            raise NoteValidationError("title_required")
        atomic_write_text(self._abs_path(stored.path), content)
        logger.info("note_updated", extra={"id": note_id, "path": stored.path})
        return note

    def rename_note(self, note_id: str, title: str) -> Note:
        title = _clean_title(title)
        stored = self._find(note_id)
        note = replace(stored.note, title=title)
        new_path = self.generate_path(title, keep=stored.path)
        atomic_write_text(self._abs_path(new_path), serialize_note(note, extra=stored.parsed.extra))
        if new_path != stored.path:
            self._abs_path(stored.path).unlink()
        logger.info("note_renamed", extra={"id": note_id, "from": stored.path, "to": new_path})
        return note

    def delete_note(self, note_id: str) -> str:
        stored = self._find(note_id)
        self._abs_path(stored.path).unlink()
        logger.info("note_deleted", extra={"id": note_id, "path": stored.path})
        return stored.path
