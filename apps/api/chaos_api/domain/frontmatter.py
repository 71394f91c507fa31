from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .entities import Note
from .exceptions import NoteValidationError

DELIMITER = "---"
BODY_KEY = "body"
KNOWN_KEYS = ("id", "title", "status", "tags")
TAG_FORBIDDEN = (",", "]", "\n", "\r")
_LIST_ITEM_FORBIDDEN = (",", "\n", "\r")

FrontmatterValue = str | list[str]


@dataclass(frozen=True)
class FrontmatterParse:
    frontmatter: dict[str, FrontmatterValue]
    body: str
    error: str | None = None
    raw: dict[str, str] = field(default_factory=dict)

    @property
    def extra(self) -> dict[str, FrontmatterValue]:
        """Unknown keys as their original value text, ready to write back."""
        return {k: self.raw.get(k, format_value(v)) for k, v in self.frontmatter.items() if k not in KNOWN_KEYS}


def parse_value(raw: str) -> FrontmatterValue:
    value = raw.strip()
    if len(value) >= 2 and value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [item.strip() for item in inner.split(",") if item.strip()]
    return value


def format_value(value: FrontmatterValue) -> str:
    if isinstance(value, list):
        return f"[{', '.join(value)}]"
    return value


def validate_tags(tags: Iterable[str], forbidden: tuple[str, ...] = TAG_FORBIDDEN) -> tuple[str, ...]:
    """Return ``tags`` as a tuple, or raise when one cannot be written as a list item."""
    checked = tuple(tags)
    for tag in checked:
        if not tag or tag != tag.strip() or any(ch in tag for ch in forbidden):
            raise NoteValidationError("tag_invalid")
    return checked


def _parse_line(line: str) -> tuple[str, str] | None:
    key, sep, rest = line.partition(":")
    key = key.strip()
    if not sep or not key or any(ch.isspace() for ch in key):
        return None
    return key, rest.strip()


def _drop_separator(body: str) -> str:
    if body.startswith("\r\n"):
        return body[2:]
    if body.startswith("\n"):
        return body[1:]
    return body


def parse_frontmatter(markdown: str) -> FrontmatterParse:
    if not markdown.startswith(DELIMITER):
        return FrontmatterParse(frontmatter={}, body=markdown)

    first_newline = markdown.find("\n")
    if first_newline == -1 or markdown[:first_newline].rstrip("\r") != DELIMITER:
        return FrontmatterParse(frontmatter={}, body=markdown)

    # Collect lines until one that is exactly `---`; a closing delimiter at EOF counts.
    lines: list[str] = []
    search_from = first_newline + 1
    while True:
        next_newline = markdown.find("\n", search_from)
        end = len(markdown) if next_newline == -1 else next_newline
        line = markdown[search_from:end].rstrip("\r")
        if line == DELIMITER:
            body = "" if next_newline == -1 else _drop_separator(markdown[next_newline + 1 :])
            break
        if next_newline == -1:
            return FrontmatterParse(frontmatter={}, body=markdown, error="frontmatter_unterminated")
        lines.append(line)
        search_from = next_newline + 1

    frontmatter: dict[str, FrontmatterValue] = {}
    raw: dict[str, str] = {}
    for line in lines:
        if not line.strip():
            continue
        parsed = _parse_line(line)
        if parsed is None:
            return FrontmatterParse(frontmatter={}, body=markdown, error="frontmatter_malformed_line")
        key, text = parsed
        frontmatter[key] = parse_value(text)
        raw[key] = text
    return FrontmatterParse(frontmatter=frontmatter, body=body, raw=raw)


def note_from_parse(parsed: FrontmatterParse, fallback_id: str | None = None) -> Note:
    # Scalar fields come from the raw text so `[a,b]` stays a title, not a list.
    raw = parsed.raw
    raw_tags = parsed.frontmatter.get("tags")
    if isinstance(raw_tags, list):
        tags = tuple(raw_tags)
    elif raw_tags:
        tags = (raw_tags,)
    else:
        tags = ()
    return Note(
        id=raw.get("id") or (fallback_id or ""),
        title=raw.get("title", ""),
        status=raw.get("status") or None,
        tags=tags,
        body=parsed.body,
    )


def note_from_markdown(markdown: str, fallback_id: str | None = None) -> Note:
    return note_from_parse(parse_frontmatter(markdown), fallback_id=fallback_id)


def _field_line(key: str, text: str) -> str:
    if "\n" in text or "\r" in text:
        raise NoteValidationError(f"{key}_invalid")
    return f"{key}: {text}"


def serialize_note(note: Note, extra: dict[str, FrontmatterValue] | None = None) -> str:
    """Render ``note`` as markdown. Raises NoteValidationError for a value that would not read back."""
    lines = [DELIMITER, _field_line("id", note.id), _field_line("title", note.title)]
    if note.status:
        lines.append(_field_line("status", note.status))
    if note.tags:
        lines.append(_field_line("tags", format_value(list(validate_tags(note.tags, _LIST_ITEM_FORBIDDEN)))))
    for key, value in (extra or {}).items():
        if key in KNOWN_KEYS:
            continue
        lines.append(_field_line(key, format_value(value)))
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n\n" + note.body


def extract_field(parsed: FrontmatterParse, key: str) -> str | None:
    """Return one field as display text, or None when it is absent.

    Lists render as ``[a, b, c]``. The reserved ``body`` key yields the
    trimmed body rather than a metadata value.
    """
    if key == BODY_KEY:
        return parsed.body.strip()
    if key not in parsed.frontmatter:
        return None
    return format_value(parsed.frontmatter[key])


def format_metadata_lines(parsed: FrontmatterParse) -> list[str]:
    return [f"{key}: {format_value(value)}" for key, value in parsed.frontmatter.items()]


def fields_as_json(parsed: FrontmatterParse) -> dict[str, object]:
    data: dict[str, object] = {k: (list(v) if isinstance(v, list) else v) for k, v in parsed.frontmatter.items()}
    data[BODY_KEY] = parsed.body
    return data
