from .config import PageLayout
from .exceptions import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    PagedArrayError,
    PageSizeMismatchError,
)
from .listener import AccessSlot, PagedArrayListener
from .paged_array import PagedArray

__all__ = [
    "PagedArray",
    "PageLayout",
    # Access notification
    "AccessSlot",
    "PagedArrayListener",
    # Exceptions
    "PagedArrayError",
    "InvalidArgumentError",
    "PageSizeMismatchError",
    "IndexOutOfRangeError",
]
