from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchWindow:
    page: int
    per_page: int

    @property
    def global_start(self) -> int:
        # provider ranks are 1-based
        return (self.page - 1) * self.per_page + 1


@dataclass(frozen=True)
class UpstreamBatchRequest:
    start: int
    count: int


def plan_batches(window: SearchWindow, per_call_max: int, ceiling: int) -> list[UpstreamBatchRequest]:
    """Split a window into the fewest provider calls that cover it.

    An empty plan means the window lies beyond the ceiling and the provider
    must not be contacted at all.
    """
    start = window.global_start
    if start > ceiling:
        return []

    batches: list[UpstreamBatchRequest] = []
    remaining = min(window.per_page, ceiling - (start - 1))
    while remaining > 0 and start <= ceiling:
        take = min(per_call_max, remaining, ceiling - (start - 1))
        batches.append(UpstreamBatchRequest(start=start, count=take))
        start += take
        remaining -= take
    return batches
