from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Union

from .entities import Note
from .frontmatter import FrontmatterValue, serialize_note, validate_tags


@dataclass
class EditBuffer:
    """Pending overrides for one open note.

    ``None`` means "unchanged from the snapshot". An empty status string
    clears the status and an empty tag list clears the tags.
    """

    title: str | None = None
    body: str | None = None
    status: str | None = None
    tags: list[str] | None = None

    def clear(self) -> None:
        self.title = None
        self.body = None
        self.status = None
        self.tags = None


@dataclass(frozen=True)
class ChangeSet:
    title_changed: bool
    status_changed: bool
    tags_changed: bool
    body_changed: bool

    @property
    def body_meta_changed(self) -> bool:
        return self.body_changed or self.status_changed or self.tags_changed

    @property
    def has_any_change(self) -> bool:
        return self.title_changed or self.body_meta_changed


@dataclass(frozen=True)
class RenameOperation:
    title: str


@dataclass(frozen=True)
class ContentUpdateOperation:
    content: str


WriteOperation = Union[RenameOperation, ContentUpdateOperation]


def _status_key(status: str | None) -> str:
    return status or ""


def _joined(tags: Sequence[str]) -> str:
    return " ".join(tags)


def effective_note(original: Note, edits: EditBuffer) -> Note:
    status = original.status if edits.status is None else (edits.status or None)
    return replace(
        original,
        title=original.title if edits.title is None else edits.title,
        status=status,
        tags=original.tags if edits.tags is None else tuple(edits.tags),
        body=original.body if edits.body is None else edits.body,
    )


def compute_change_set(original: Note, edits: EditBuffer) -> ChangeSet:
    status = original.status if edits.status is None else edits.status
    tags = original.tags if edits.tags is None else edits.tags
    return ChangeSet(
        title_changed=edits.title is not None and edits.title != original.title,
        status_changed=_status_key(status) != _status_key(original.status),
        # Tags compare as a space-joined string, so ["a b"] equals ["a", "b"].
        tags_changed=_joined(tags) != _joined(original.tags),
        body_changed=edits.body is not None and edits.body != original.body,
    )


def resolve_operations(
    original: Note,
    edits: EditBuffer,
    extra: dict[str, FrontmatterValue] | None = None,
) -> list[WriteOperation]:
    """Decide which writes persist ``edits`` on top of ``original``.

    At most two operations come back: a rename first, then a content update
    carrying the fully re-serialized note with the effective values. An
    empty list means there is nothing to save.
    """
    changes = compute_change_set(original, edits)
    ops: list[WriteOperation] = []
    if changes.title_changed:
        ops.append(RenameOperation(title=edits.title or ""))
    if changes.body_meta_changed:
        ops.append(ContentUpdateOperation(content=serialize_note(effective_note(original, edits), extra=extra)))
    return ops


def parse_tags_input(text: str) -> list[str]:
    return list(validate_tags(t.strip() for t in text.split(" ") if t.strip()))
