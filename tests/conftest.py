"""
Shared pytest fixtures and configuration for pagedarray tests.

This module provides common fixtures used across the unit tests,
including pre-sized arrays and listener doubles.
"""

from typing import Any

import pytest

from pagedarray import AccessSlot, PagedArray


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests without external collaborators")


class RecordingListener:
    """Listener double that records every notification and leaves the slot alone."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, int, Any]] = []

    def will_access_index(self, paged_array: PagedArray[Any], index: int, slot: AccessSlot[Any]):
        self.calls.append((paged_array, index, slot.value))

    @property
    def indices(self) -> list[int]:
        return [index for _, index, _ in self.calls]


class SynchronousLoader:
    """
    Listener double acting as a page loader with everything already cached.

    On a miss it supplies the whole page through set_page and puts the
    requested item into the slot, so readers never see the placeholder.
    """

    def __init__(self, source: list[Any]) -> None:
        self.source = source
        self.requested_pages: list[int] = []

    def will_access_index(self, paged_array: PagedArray[Any], index: int, slot: AccessSlot[Any]):
        page = paged_array.page_for_index(index)
        if paged_array.is_page_loaded(page):
            return

        self.requested_pages.append(page)
        indices = paged_array.index_range_for_page(page)
        paged_array.set_page(page, self.source[indices.start : indices.stop])
        slot.replace(self.source[index])


@pytest.fixture
def letters() -> list[str]:
    """Ten distinct items, a through j."""
    return list("abcdefghij")


@pytest.fixture
def paged_array() -> PagedArray[str]:
    """
    Returns an empty array of 10 items in pages of 3, numbered from 1.

    Pages 1..3 are full, page 4 (the terminal page) holds a single item.
    """
    return PagedArray(count=10, page_length=3, origin_page=1)


@pytest.fixture
def boundary_array() -> PagedArray[str]:
    """Returns an empty array of 10 items in pages of 4 (terminal page holds 2)."""
    return PagedArray(count=10, page_length=4, origin_page=1)


@pytest.fixture
def recording_listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def synchronous_loader(letters: list[str]) -> SynchronousLoader:
    return SynchronousLoader(letters)
