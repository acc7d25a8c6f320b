"""Bounded, order-preserving fan-out over a thread pool (``p-map`` style).

Used for per-account balance lookups, which the API can only serve one
account per request. The contract is all-or-nothing:

- results come back in input order;
- the first mapper error propagates unchanged, work that hasn't started is
  cancelled, and no partial list is returned;
- ``concurrency=1`` runs inline on the calling thread, with no pool at all.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import TypeVar

InT = TypeVar("InT")
OutT = TypeVar("OutT")


def p_map(
    iterable: Iterable[InT],
    mapper: Callable[[InT], OutT],
    *,
    concurrency: int,
    thread_name_prefix: str = "starling-pmap",
) -> list[OutT]:
    """Map ``iterable`` through ``mapper`` with at most ``concurrency`` in flight."""

    if not isinstance(concurrency, int) or isinstance(concurrency, bool) or concurrency < 1:
        raise ValueError("concurrency must be a positive integer")

    items = list(iterable)
    if concurrency == 1 or len(items) <= 1:
        return [mapper(item) for item in items]

    with ThreadPoolExecutor(
        max_workers=min(concurrency, len(items)), thread_name_prefix=thread_name_prefix
    ) as pool:
        futures: list[Future[OutT]] = [pool.submit(mapper, item) for item in items]
        done, _pending = wait(futures, return_when=FIRST_EXCEPTION)
        for fut in futures:
            if fut in done and not fut.cancelled() and fut.exception() is not None:
                pool.shutdown(wait=True, cancel_futures=True)
                raise fut.exception()  # type: ignore[misc]
        return [fut.result() for fut in futures]


__all__ = ["p_map"]
