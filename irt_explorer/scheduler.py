from __future__ import annotations

import time
from typing import Callable, Optional

from . import config


class RenderCoalescer:
    """Run the most recently scheduled callback at most once per quantum.

    Nothing runs on its own: the host calls :meth:`flush` at every refresh
    opportunity (an interval tick, a Streamlit rerun, a test step).
    """

    def __init__(
        self,
        quantum: float = config.RENDER_QUANTUM_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._quantum = quantum
        self._clock = clock
        self._pending: Optional[Callable[[], None]] = None
        self._last_flush: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self._pending = callback

    def cancel(self) -> None:
        self._pending = None

    def flush(self, *, force: bool = False) -> bool:
        if self._pending is None:
            return False
        now = self._clock()
        if not force and self._last_flush is not None and now - self._last_flush < self._quantum:
            return False
        callback = self._pending
        self._pending = None
        self._last_flush = now
        callback()
        return True
