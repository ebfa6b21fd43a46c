from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, TypeVar

from .errors import UpstreamTimeout

T = TypeVar("T")


class Deadline:
    """A wall-clock bound for one operation.

    ``run`` wraps the whole operation as a task and stops waiting for it once
    the budget is spent. The task itself should call ``check`` between steps
    (each redirect hop, each body chunk) so it winds down soon after the
    caller has given up on it.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.seconds = seconds
        self.expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def check(self) -> None:
        if self.expired:
            raise UpstreamTimeout("Upstream timeout")

    def run(self, fn: Callable[[], T]) -> T:
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="deadline")
        future = pool.submit(fn)
        try:
            return future.result(timeout=self.remaining())
        except FutureTimeout:
            future.cancel()
            raise UpstreamTimeout("Upstream timeout") from None
        finally:
            # don't block on an abandoned task; it stops at its next check()
            pool.shutdown(wait=False)
