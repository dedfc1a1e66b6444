from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import AlreadyActiveError, NotActiveError


class ActiveSessionRegistry:
    """Process-wide map of actor -> start time of the open session.

    At most one open entry per actor, regardless of tenant. Entries live only
    in memory: they are gone after a restart and never expire on their own.
    All check-and-set operations run under one lock.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_local):
        self._clock = clock
        self._lock = threading.Lock()
        self._active: dict[str, datetime] = {}

    def clock_in(self, actor_id: str) -> datetime:
        with self._lock:
            if actor_id in self._active:
                raise AlreadyActiveError(actor_id)
            start = self._clock()
            self._active[actor_id] = start
            return start

    def clock_out(self, actor_id: str) -> tuple[datetime, datetime]:
        with self._lock:
            start = self._active.pop(actor_id, None)
            if start is None:
                raise NotActiveError(actor_id)
            return start, self._clock()

    def peek(self, actor_id: str) -> Optional[datetime]:
        with self._lock:
            return self._active.get(actor_id)

    def list_active(self) -> list[tuple[str, datetime]]:
        with self._lock:
            return list(self._active.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)
