# pathfinder/core/dispatch.py
#!/usr/bin/env python3
"""
Caller execution contexts for search completions.

A path finder never calls a completion from its worker directly; it posts it to
a dispatcher. CallerQueue hands callables to whichever thread drains it (the
viewer drains once per frame), ImmediateDispatcher runs them where they were
posted.
"""

import logging
import queue
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    def post(self, fn: Callable[[], None]) -> None: ...


class ImmediateDispatcher:
    """Runs every posted callable on the posting thread."""

    def post(self, fn: Callable[[], None]) -> None:
        fn()


class CallerQueue:
    """Thread-safe mailbox of callables, drained by the owning thread."""

    def __init__(self) -> None:
        self._pending: "queue.Queue[Callable[[], None]]" = queue.Queue()

    def post(self, fn: Callable[[], None]) -> None:
        self._pending.put(fn)

    def pending(self) -> int:
        return self._pending.qsize()

    def drain(self, limit: Optional[int] = None, timeout: Optional[float] = None) -> int:
        """
        Run queued callables on the current thread and return how many ran.

        With a timeout, waits up to that long for the first callable when the
        queue is empty. Exceptions raised by a callable propagate to the caller.
        """
        ran = 0
        block = timeout is not None
        while limit is None or ran < limit:
            try:
                fn = self._pending.get(block=block, timeout=timeout)
            except queue.Empty:
                break
            block = False
            ran += 1
            fn()
        if ran:
            logger.debug("drained %d completion(s)", ran)
        return ran
