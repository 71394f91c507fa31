"""Edit session for one open note.

The session owns the note snapshot returned by the server and a single
:class:`EditBuffer`. Saving turns the pending edits into write operations and
issues them in order; a failure is published as a notification and leaves the
buffer untouched so the user can retry.
"""

from __future__ import annotations

import logging
from typing import Optional

from chaos_api.domain.changes import (
    ChangeSet,
    ContentUpdateOperation,
    EditBuffer,
    RenameOperation,
    WriteOperation,
    compute_change_set,
    effective_note,
    parse_tags_input,
    resolve_operations,
)
from chaos_api.domain.entities import Note
from chaos_api.domain.exceptions import NoteValidationError
from chaos_api.domain.frontmatter import FrontmatterParse, parse_frontmatter, validate_tags
from chaos_api.domain.links import resolve_internal_links
from chaos_api.domain.schemas import NoteDetailOut

from .api import NotesApiError, NotesClient
from .notifications import NotificationLog

logger = logging.getLogger("chaos.client")


class EditSession:
    def __init__(self, client: NotesClient, detail: NoteDetailOut, notifications: NotificationLog) -> None:
        self.client = client
        self.notifications = notifications
        self.buffer = EditBuffer()
        self.saving = False
        self._set_snapshot(detail)

    @classmethod
    async def open(cls, client: NotesClient, note_id: str, notifications: NotificationLog) -> EditSession:
        detail = await client.get_note(note_id)
        return cls(client, detail, notifications)

    def _set_snapshot(self, detail: NoteDetailOut) -> None:
        self._parsed: FrontmatterParse = parse_frontmatter(detail.content)
        self.original = Note(
            id=detail.id,
            title=detail.title,
            status=detail.status or None,
            tags=tuple(detail.tags),
            body=detail.body,
        )

    @property
    def note_id(self) -> str:
        return self.original.id

    @property
    def current(self) -> Note:
        return effective_note(self.original, self.buffer)

    @property
    def changes(self) -> ChangeSet:
        return compute_change_set(self.original, self.buffer)

    @property
    def can_save(self) -> bool:
        return self.changes.has_any_change and not self.saving

    def set_title(self, title: str) -> None:
        if "\n" in title or "\r" in title:
            raise NoteValidationError("title_invalid")
        self.buffer.title = title

    def set_body(self, body: str) -> None:
        self.buffer.body = body

    def set_status(self, status: Optional[str]) -> None:
        self.buffer.status = status or ""

    def set_tags(self, tags: list[str]) -> None:
        self.buffer.tags = list(validate_tags(tags))

    def set_tags_input(self, text: str) -> None:
        self.set_tags(parse_tags_input(text))

    def pending_operations(self) -> list[WriteOperation]:
        return resolve_operations(self.original, self.buffer, extra=self._parsed.extra)

    def preview(self) -> str:
        return resolve_internal_links(self.current.body, self.client.base_path)

    async def _apply(self, op: WriteOperation) -> None:
        if isinstance(op, RenameOperation):
            await self.client.rename_note(self.note_id, op.title)
        elif isinstance(op, ContentUpdateOperation):
            await self.client.update_note(self.note_id, op.content)

    async def save(self) -> bool:
        """Persist pending edits. Returns True when something was saved."""
        if self.saving:
            return False
        ops = self.pending_operations()
        if not ops:
            return False

        self.saving = True
        try:
            for op in ops:
                await self._apply(op)
        except NotesApiError as e:
            logger.info("save_failed", extra={"id": self.note_id, "error": str(e)})
            self.notifications.publish("error", str(e))
            return False
        finally:
            self.saving = False

        await self._reload()
        self.notifications.publish("success", "Saved")
        return True

    async def _reload(self) -> None:
        saved = self.current
        try:
            detail = await self.client.get_note(self.note_id)
        except NotesApiError:
            # The writes landed, so the values that were sent become the snapshot.
            logger.info("reload_failed", extra={"id": self.note_id})
            self.original = saved
        else:
            self._set_snapshot(detail)
        self.buffer.clear()

    async def delete(self) -> bool:
        try:
            await self.client.delete_note(self.note_id)
        except NotesApiError as e:
            self.notifications.publish("error", str(e))
            return False
        self.notifications.publish("success", "Note deleted")
        return True
