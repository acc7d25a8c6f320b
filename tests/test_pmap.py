import threading
import time

import pytest

from starling_spaces.pmap import p_map


def test_preserves_input_order_under_concurrency():
    def slow_square(n: int) -> int:
        time.sleep(0.01 * (5 - n))
        return n * n

    assert p_map(range(5), slow_square, concurrency=5) == [0, 1, 4, 9, 16]


def test_respects_concurrency_cap():
    lock = threading.Lock()
    inflight = 0
    peak = 0

    def work(n: int) -> int:
        nonlocal inflight, peak
        with lock:
            inflight += 1
            peak = max(peak, inflight)
        time.sleep(0.02)
        with lock:
            inflight -= 1
        return n

    assert p_map(range(8), work, concurrency=2) == list(range(8))
    assert peak <= 2


def test_sequential_mode_stops_at_first_error():
    seen: list[int] = []

    def work(n: int) -> int:
        seen.append(n)
        if n == 1:
            raise RuntimeError("boom")
        return n

    with pytest.raises(RuntimeError, match="boom"):
        p_map([0, 1, 2], work, concurrency=1)
    assert seen == [0, 1]


def test_error_propagates_from_pool():
    def work(n: int) -> int:
        if n == 2:
            raise KeyError(n)
        return n

    with pytest.raises(KeyError):
        p_map(range(4), work, concurrency=3)


@pytest.mark.parametrize("bad", [0, -1, True])
def test_rejects_invalid_concurrency(bad):
    with pytest.raises(ValueError):
        p_map([1], lambda n: n, concurrency=bad)
