from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class IdGenerator:
    """Time-based string ids (milliseconds since epoch).

    Ids are strictly increasing within one process: two calls in the same
    millisecond get consecutive values instead of colliding.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)
