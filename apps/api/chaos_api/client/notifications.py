from __future__ import annotations

import itertools
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Literal

NotificationKind = Literal["success", "error"]


@dataclass(frozen=True)
class Notification:
    id: int
    kind: NotificationKind
    message: str
    created_at: float


class NotificationLog:
    """Bounded log of transient messages that expire after ``ttl_s`` seconds."""

    def __init__(
        self,
        *,
        ttl_s: float = 4.0,
        capacity: int = 50,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_s = ttl_s
        self._clock = clock
        self._items: deque[Notification] = deque(maxlen=capacity)
        self._ids = itertools.count(1)

    def publish(self, kind: NotificationKind, message: str) -> Notification:
        item = Notification(id=next(self._ids), kind=kind, message=message, created_at=self._clock())
        self._items.append(item)
        return item

    def _evict(self) -> None:
        cutoff = self._clock() - self.ttl_s
        while self._items and self._items[0].created_at <= cutoff:
            self._items.popleft()

    def active(self) -> list[Notification]:
        self._evict()
        return list(self._items)
