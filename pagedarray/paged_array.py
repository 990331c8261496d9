import operator
import weakref
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

from ._logging import logger, summarize_items
from .config import COUNT_ADAPTER, PageLayout
from .exceptions import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    PageSizeMismatchError,
    handle_validation_errors,
)
from .listener import AccessSlot, PagedArrayListener

T = TypeVar("T")


class PagedArray(Sequence[T], Generic[T]):
    """
    A fixed-length sequence whose contents arrive later, one page at a time.

    The array behaves like a fully materialized sequence of `total_count`
    items. Pages of real data are supplied out of order through set_page();
    positions whose page has not been supplied read as the placeholder.
    Every positional read first notifies the (weakly held) listener, which
    may start loading the page and may substitute the returned value.

    Usage:
        array = PagedArray(count=10, page_length=3)
        array.set_page(1, ["a", "b", "c"])
        array[1]   # "b"
        array[9]   # None (page 4 not loaded yet)
    """

    def __init__(
        self,
        count: int,
        page_length: int,
        origin_page: int = 1,
        *,
        placeholder: Any = None,
        listener: PagedArrayListener | None = None,
    ) -> None:
        with handle_validation_errors():
            self._layout = PageLayout(page_length=page_length, origin_page=origin_page)
        with handle_validation_errors(field="count"):
            self._total_count: int = COUNT_ADAPTER.validate_python(count)

        self._number_of_pages = self._layout.page_count(self._total_count)
        self._pages: dict[int, tuple[T, ...]] = {}
        self._listener_ref: weakref.ref[PagedArrayListener] | None = None
        self.placeholder = placeholder

        if listener is not None:
            self.listener = listener

    @classmethod
    def create(
        cls,
        count: int,
        page_length: int,
        origin_page: int = 1,
        *,
        placeholder: Any = None,
        listener: PagedArrayListener | None = None,
    ) -> "PagedArray[T]":
        """Builds an empty array; pages are numbered from `origin_page` (1 by default)."""
        return cls(count, page_length, origin_page, placeholder=placeholder, listener=listener)

    # --- SIZING ---

    @property
    def layout(self) -> PageLayout:
        return self._layout

    @property
    def page_length(self) -> int:
        return self._layout.page_length

    @property
    def origin_page(self) -> int:
        return self._layout.origin_page

    @property
    def number_of_pages(self) -> int:
        return self._number_of_pages

    @property
    def total_count(self) -> int:
        return self._total_count

    @total_count.setter
    def total_count(self, value: int) -> None:
        """
        Revises the logical length and recomputes number_of_pages.

        Stored pages are kept even when they fall beyond the new bound;
        they stay in existing_objects() but index accessors cannot reach them.
        """
        with handle_validation_errors(field="total_count"):
            count = COUNT_ADAPTER.validate_python(value)

        previous = self._total_count
        self._total_count = count
        self._number_of_pages = self._layout.page_count(count)

        if count != previous:
            logger.info(
                "Total count changed",
                extra={
                    "operation": "set_total_count",
                    "previous_total_count": previous,
                    "total_count": count,
                    "number_of_pages": self._number_of_pages,
                },
            )

    # --- LISTENER ---

    @property
    def listener(self) -> PagedArrayListener | None:
        """The access listener, or None if unset or already garbage collected."""
        if self._listener_ref is None:
            return None

        listener = self._listener_ref()
        if listener is None:
            logger.debug("Listener was collected", extra={"operation": "listener"})
            self._listener_ref = None
        return listener

    @listener.setter
    def listener(self, listener: PagedArrayListener | None) -> None:
        if listener is None:
            self._listener_ref = None
            return

        if not callable(getattr(listener, "will_access_index", None)):
            raise InvalidArgumentError(
                f"Listener {listener!r} does not implement will_access_index()",
                field="listener",
                value=listener,
            )
        try:
            self._listener_ref = weakref.ref(listener)
        except TypeError as e:
            raise InvalidArgumentError(
                f"Listener {listener!r} cannot be weakly referenced",
                field="listener",
                value=listener,
                original_error=e,
            ) from e

    # --- INDEX / PAGE TRANSLATION ---

    def _valid_pages(self) -> range:
        return range(self.origin_page, self.origin_page + self._number_of_pages)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._total_count:
            raise IndexOutOfRangeError(
                f"Index {index} out of range for {self._total_count} items",
                index=index,
                bounds=range(self._total_count),
            )

    def _check_page(self, page: int) -> None:
        pages = self._valid_pages()
        if page not in pages:
            raise IndexOutOfRangeError(
                f"Page {page} out of range (valid pages: {pages.start}..{pages.stop - 1})",
                index=page,
                bounds=pages,
            )

    def page_for_index(self, index: int) -> int:
        """
        Returns the page number holding logical `index`.

        Raises:
            IndexOutOfRangeError: If index is outside [0, total_count)
        """
        self._check_index(index)
        return self._layout.page_for_offset(index)

    def index_range_for_page(self, page: int) -> range:
        """
        Returns the logical indices covered by `page`.

        Every page spans page_length indices except the terminal one,
        which stops at total_count.

        Raises:
            IndexOutOfRangeError: If page is not a valid page number
        """
        self._check_page(page)
        start = self._layout.page_start(page)
        if page == self._layout.terminal_page(self._total_count):
            return range(start, start + max(0, self._total_count - start))
        return range(start, start + self.page_length)

    # --- MUTATION ---

    def set_page(self, page: int, items: Iterable[T]) -> None:
        """
        Stores (or replaces) the items of one page.

        Args:
            page: Page number, between origin_page and the terminal page
            items: The items of that page, in index order

        Raises:
            IndexOutOfRangeError: If page is not a valid page number
            PageSizeMismatchError: If a non-terminal page does not hold exactly
                page_length items, or the terminal page holds more items than
                its index range covers
        """
        expected_range = self.index_range_for_page(page)
        stored = tuple(items)
        is_terminal = page == self._layout.terminal_page(self._total_count)

        expected = len(expected_range) if is_terminal else self.page_length
        if len(stored) > expected or (not is_terminal and len(stored) != expected):
            logger.warning(
                "Rejected page with wrong size",
                extra={
                    "operation": "set_page",
                    "page": page,
                    "expected": expected,
                    "item_count": len(stored),
                },
            )
            raise PageSizeMismatchError(page=page, expected=expected, actual=len(stored))

        if len(stored) < expected:
            # Short terminal pages are normal while the total count is an estimate
            logger.debug(
                "Accepted short terminal page",
                extra={
                    "operation": "set_page",
                    "page": page,
                    "expected": expected,
                    "item_count": len(stored),
                },
            )

        self._pages[page] = stored
        logger.debug(
            "Page stored",
            extra={
                "operation": "set_page",
                "page": page,
                "item_count": len(stored),
                "preview": summarize_items(stored),
            },
        )

    def invalidate_contents(self) -> None:
        """Drops every stored page. Sizing and listener are left untouched."""
        dropped = len(self._pages)
        self._pages.clear()
        logger.info(
            "Contents invalidated",
            extra={
                "operation": "invalidate",
                "dropped_pages": dropped,
                "total_count": self._total_count,
            },
        )

    # --- ELEMENT ACCESS ---

    def _stored_value(self, index: int) -> T | Any:
        items = self._pages.get(self._layout.page_for_offset(index))
        if items is None:
            return self.placeholder

        offset = index % self.page_length
        # A page stored as terminal may be short once total_count grows
        if offset >= len(items):
            return self.placeholder
        return items[offset]

    def raw_object_at_index(self, index: int) -> T | Any:
        """
        Returns the item at `index`, or the placeholder if its page is missing.

        The listener, if any, is notified first and may replace the value.

        Raises:
            IndexOutOfRangeError: If index is outside [0, total_count)
        """
        self._check_index(index)
        slot: AccessSlot[T] = AccessSlot(self._stored_value(index))

        listener = self.listener
        if listener is not None:
            listener.will_access_index(self, index, slot)
        return slot.value

    def __len__(self) -> int:
        return self._total_count

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        if isinstance(index, slice):
            return [self.raw_object_at_index(i) for i in range(*index.indices(self._total_count))]

        index = operator.index(index)
        position = index + self._total_count if index < 0 else index
        if position < 0:
            raise IndexOutOfRangeError(
                f"Index {index} out of range for {self._total_count} items",
                index=index,
                bounds=range(self._total_count),
            )
        return self.raw_object_at_index(position)

    def __iter__(self) -> Iterator[T]:
        # total_count is re-read each step; the listener may revise it mid-loop
        index = 0
        while index < self._total_count:
            yield self.raw_object_at_index(index)
            index += 1

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(total_count={self._total_count}, "
            f"page_length={self.page_length}, origin_page={self.origin_page}, "
            f"loaded_pages={self.loaded_page_numbers()})"
        )

    # --- BULK ACCESS (no listener notification) ---

    @property
    def pages(self) -> dict[int, tuple[T, ...]]:
        """Snapshot of the stored pages, keyed by page number."""
        return dict(self._pages)

    def loaded_page_numbers(self) -> list[int]:
        return sorted(self._pages)

    def is_page_loaded(self, page: int) -> bool:
        return page in self._pages

    def iter_existing_objects(self) -> Iterator[tuple[int, T]]:
        """
        Lazily yields (index, item) for every stored item, in index order.
        Placeholders are never produced; leave the loop to stop early.
        """
        for page, items in sorted(self._pages.items(), key=operator.itemgetter(0)):
            start = self._layout.page_start(page)
            for offset, item in enumerate(items):
                yield start + offset, item

    def enumerate_existing_objects(self, visit: Callable[[T, int], bool | None]) -> None:
        """
        Calls visit(item, index) for each stored item in index order.
        Enumeration stops as soon as visit returns a truthy value.
        """
        for index, item in self.iter_existing_objects():
            if visit(item, index):
                return

    def existing_objects(self) -> list[T]:
        """All stored items in index order, without placeholders."""
        return [item for _, item in self.iter_existing_objects()]

    def to_array(self) -> list[T | Any]:
        """A list of total_count entries: stored items, placeholder elsewhere."""
        return [self._stored_value(index) for index in range(self._total_count)]
