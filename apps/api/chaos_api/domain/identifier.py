from __future__ import annotations

import secrets
import string

NOTE_ID_LENGTH = 21
NOTE_ID_ALPHABET = string.ascii_lowercase + string.digits

_ALLOWED = frozenset(NOTE_ID_ALPHABET)


def is_valid_note_id(value: object) -> bool:
    if not isinstance(value, str) or len(value) != NOTE_ID_LENGTH:
        return False
    return all(ch in _ALLOWED for ch in value)


def new_note_id() -> str:
    return "".join(secrets.choice(NOTE_ID_ALPHABET) for _ in range(NOTE_ID_LENGTH))
