from __future__ import annotations


class NoteError(Exception):
    pass


class NoteNotFoundError(NoteError, LookupError):
    pass


class NoteExistsError(NoteError):
    pass


class NoteValidationError(NoteError, ValueError):
    pass
