from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from chaos_api.domain.schemas import NoteSummaryOut

from .api import NotesApiError, NotesClient

logger = logging.getLogger("chaos.client")

SEARCH_DEBOUNCE_S = 0.2
PAGE_SIZE = 20


def should_load_more(scroll_top: float, scroll_height: float, client_height: float) -> bool:
    return scroll_height - scroll_top <= client_height * 1.5


class SearchDebouncer:
    """Delays a search term until typing pauses for ``delay_s`` seconds.

    Every :meth:`push` cancels the pending timer, so only the last term of a
    burst reaches ``on_settle``.
    """

    def __init__(
        self,
        on_settle: Callable[[str], Union[Awaitable[Any], None]],
        delay_s: float = SEARCH_DEBOUNCE_S,
    ) -> None:
        self.delay_s = delay_s
        self._on_settle = on_settle
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, term: str) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay_s, self._fire, term)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, term: str) -> None:
        self._handle = None
        result = self._on_settle(term)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)


class NoteListing:
    """Paged note list for one search term.

    ``load_more`` starts a fetch only when none is outstanding and the server
    reported more results. Responses for a superseded search are dropped.
    """

    def __init__(self, client: NotesClient, *, page_size: int = PAGE_SIZE) -> None:
        self.client = client
        self.page_size = page_size
        self.search = ""
        self.notes: list[NoteSummaryOut] = []
        self.total = 0
        self.has_more = False
        self.error: Optional[str] = None
        self._pages = 0
        self._generation = 0
        self._loading = False

    @property
    def is_loading(self) -> bool:
        return self._loading

    async def refresh(self, search: Optional[str] = None) -> bool:
        if search is not None:
            self.search = search
        self._generation += 1
        self.notes = []
        self.total = 0
        self.has_more = False
        self._pages = 0
        return await self._fetch(1)

    async def load_more(self) -> bool:
        if self._loading or not self.has_more:
            return False
        return await self._fetch(self._pages + 1)

    async def _fetch(self, page: int) -> bool:
        generation = self._generation
        self._loading = True
        self.error = None
        try:
            result = await self.client.get_notes(page, self.page_size, self.search)
        except NotesApiError as e:
            if generation == self._generation:
                self.error = str(e)
            logger.info("listing_failed", extra={"page": page, "error": str(e)})
            return False
        finally:
            if generation == self._generation:
                self._loading = False

        if generation != self._generation:
            return False
        self.notes.extend(result.notes)
        self.total = result.total
        self.has_more = result.hasMore
        self._pages = page
        return True
