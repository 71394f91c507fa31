from __future__ import annotations

import re
from dataclasses import dataclass

from .identifier import NOTE_ID_LENGTH, is_valid_note_id

DEFAULT_BASE_PATH = "/chaos"

_PIPED_LINK_RE = re.compile(r"\[\[([a-z0-9]{%d})\|([^\]]+)\]\]" % NOTE_ID_LENGTH)
_ANY_LINK_RE = re.compile(r"\[\[([a-z0-9]{%d})(?:\|([^\]]+))?\]\]" % NOTE_ID_LENGTH)


@dataclass(frozen=True)
class InternalLink:
    note_id: str
    display: str | None
    start_offset: int
    end_offset: int


def _base(base_path: str) -> str:
    return base_path.rstrip("/")


def notes_root_path(base_path: str = DEFAULT_BASE_PATH) -> str:
    return f"{_base(base_path)}/"


def note_path(note_id: str, base_path: str = DEFAULT_BASE_PATH) -> str:
    return f"{_base(base_path)}/note/{note_id}"


def internal_link_target(href: str | None, base_path: str = DEFAULT_BASE_PATH) -> str | None:
    if not href:
        return None
    prefix = f"{_base(base_path)}/note/"
    if not href.startswith(prefix):
        return None
    candidate = href[len(prefix) :]
    return candidate if is_valid_note_id(candidate) else None


def find_internal_links(text: str) -> list[InternalLink]:
    return [
        InternalLink(note_id=m.group(1), display=m.group(2), start_offset=m.start(), end_offset=m.end())
        for m in _ANY_LINK_RE.finditer(text)
    ]


def resolve_internal_links(text: str, base_path: str = DEFAULT_BASE_PATH) -> str:
    """Rewrite ``[[id|text]]`` references into markdown links.

    Bare ``[[id]]`` references stay as written; only the piped form becomes
    a link. Brackets around anything that is not a valid note id are left
    untouched.
    """
    return _PIPED_LINK_RE.sub(lambda m: f"[{m.group(2)}]({note_path(m.group(1), base_path)})", text)
