import math

from receitas.search.batching import SearchWindow, UpstreamBatchRequest, plan_batches


def test_global_start():
    assert SearchWindow(page=1, per_page=10).global_start == 1
    assert SearchWindow(page=2, per_page=50).global_start == 51


def test_plan_splits_into_per_call_batches():
    plan = plan_batches(SearchWindow(page=1, per_page=25), per_call_max=10, ceiling=100)
    assert plan == [
        UpstreamBatchRequest(start=1, count=10),
        UpstreamBatchRequest(start=11, count=10),
        UpstreamBatchRequest(start=21, count=5),
    ]


def test_plan_truncated_by_ceiling():
    plan = plan_batches(SearchWindow(page=3, per_page=45), per_call_max=10, ceiling=100)
    # window 91..135 -> only 91..100 is addressable
    assert plan == [UpstreamBatchRequest(start=91, count=10)]


def test_window_beyond_ceiling_is_empty():
    assert plan_batches(SearchWindow(page=3, per_page=50), per_call_max=10, ceiling=100) == []
    assert plan_batches(SearchWindow(page=101, per_page=1), per_call_max=10, ceiling=100) == []


def test_batch_count_property():
    for per_page in range(1, 51):
        for page in range(1, 15):
            window = SearchWindow(page=page, per_page=per_page)
            plan = plan_batches(window, per_call_max=10, ceiling=100)

            effective = max(0, min(per_page, 100 - (window.global_start - 1)))
            assert len(plan) == math.ceil(effective / 10)
            assert all(1 <= b.count <= 10 for b in plan)
            assert sum(b.count for b in plan) == effective

            # contiguous, starting at the window's first rank
            start = window.global_start
            for b in plan:
                assert b.start == start
                start += b.count
