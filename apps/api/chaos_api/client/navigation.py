from __future__ import annotations

from typing import Callable, Optional

from chaos_api.domain.links import DEFAULT_BASE_PATH, internal_link_target, note_path, notes_root_path


class NoteRouter:
    """Selected note plus the shareable path that mirrors it.

    ``history`` is the list of pushed paths; ``on_select`` fires whenever the
    selection changes.
    """

    def __init__(
        self,
        base_path: str = DEFAULT_BASE_PATH,
        *,
        initial_path: str = "",
        on_select: Optional[Callable[[Optional[str]], None]] = None,
    ) -> None:
        self.base_path = base_path
        self.history: list[str] = []
        self._on_select = on_select
        self.selected_id: Optional[str] = self.note_id_from_path(initial_path)
        self.path = self._path_for(self.selected_id)

    def _path_for(self, note_id: Optional[str]) -> str:
        return note_path(note_id, self.base_path) if note_id else notes_root_path(self.base_path)

    def note_id_from_path(self, path: str) -> Optional[str]:
        return internal_link_target(path, self.base_path)

    def select(self, note_id: Optional[str]) -> None:
        self.selected_id = note_id
        self.path = self._path_for(note_id)
        self.history.append(self.path)
        if self._on_select:
            self._on_select(note_id)

    def restore(self, path: str) -> None:
        """Re-derive the selection from ``path`` without pushing history."""
        self.selected_id = self.note_id_from_path(path)
        self.path = self._path_for(self.selected_id)
        if self._on_select:
            self._on_select(self.selected_id)

    def follow_link(self, href: Optional[str]) -> bool:
        note_id = internal_link_target(href, self.base_path)
        if note_id is None:
            return False
        self.select(note_id)
        return True
