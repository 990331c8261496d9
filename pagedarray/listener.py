"""
Access-notification support for PagedArray.

A listener is told about every positional read before the value is handed
back, and may substitute the value through the AccessSlot it receives.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

if TYPE_CHECKING:
    from .paged_array import PagedArray

T = TypeVar("T")


@dataclass
class AccessSlot(Generic[T]):
    """
    Mutable output slot passed to PagedArrayListener.will_access_index.

    Attributes:
        value: The value the array is about to return (the placeholder when
               the owning page is missing). Whatever it holds after the
               listener returns is what the reader receives.
    """

    value: T | Any

    def replace(self, value: T) -> None:
        """Substitutes the value returned to the reader."""
        self.value = value


class PagedArrayListener(Protocol):
    """
    Collaborator notified on each positional read of a PagedArray.

    Typical implementations start loading the page covering `index` (calling
    PagedArray.set_page once the data is available) and, when they already
    hold the item, put it into `slot`.
    """

    def will_access_index(
        self, paged_array: "PagedArray[Any]", index: int, slot: AccessSlot[Any]
    ) -> None: ...
