"""
Lazy loading example

A PagedArray sized for a paginated backend. Reads trigger page requests
through the listener; fetches run in a thread pool and completed pages are
handed back to the array on the main thread.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor

from pagedarray import AccessSlot, PagedArray

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

PAGE_SIZE = 5
BACKEND = [f"record-{n}" for n in range(23)]


def fetch_page(page: int) -> list[str]:
    """Stands in for a paginated HTTP/database call (pages start at 1)."""
    time.sleep(0.05)
    start = (page - 1) * PAGE_SIZE
    return BACKEND[start : start + PAGE_SIZE]


class PageLoader:
    """Requests each missing page once and applies results on the caller's thread."""

    def __init__(self, executor: ThreadPoolExecutor) -> None:
        self.executor = executor
        self.in_flight: dict[int, Future[list[str]]] = {}

    def will_access_index(self, paged_array: PagedArray[str], index: int, slot: AccessSlot[str]):
        page = paged_array.page_for_index(index)
        if paged_array.is_page_loaded(page) or page in self.in_flight:
            return
        self.in_flight[page] = self.executor.submit(fetch_page, page)

    def apply_completed(self, paged_array: PagedArray[str]) -> None:
        for page, future in list(self.in_flight.items()):
            if future.done():
                paged_array.set_page(page, future.result())
                del self.in_flight[page]


with ThreadPoolExecutor(max_workers=2) as executor:
    loader = PageLoader(executor)
    records: PagedArray[str] = PagedArray(count=len(BACKEND), page_length=PAGE_SIZE)
    records.listener = loader

    # First pass: nothing loaded, every read returns the placeholder
    print("First read of index 12:", records[12])
    print("First read of index 22:", records[22])

    while loader.in_flight:
        time.sleep(0.01)
        loader.apply_completed(records)

    print("Second read of index 12:", records[12])
    print("Loaded pages:", records.loaded_page_numbers())
    print("Existing objects:", records.existing_objects())

    # Backend data went stale
    records.invalidate_contents()
    print("After invalidation:", records.to_array()[10:15])
