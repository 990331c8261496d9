from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError as PydanticValidationError


class PagedArrayError(Exception):
    """Base exception for all pagedarray errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class InvalidArgumentError(PagedArrayError, ValueError):
    """Raised when a sizing parameter is out of its allowed domain."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.field = field
        self.value = value


class PageSizeMismatchError(PagedArrayError, ValueError):
    """Raised when a page is supplied with the wrong number of items."""

    def __init__(self, page: int, expected: int, actual: int) -> None:
        super().__init__(f"Page {page} expects {expected} items, got {actual}")
        self.page = page
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(PagedArrayError, IndexError):
    """
    Raised when an index or page number falls outside the declared bounds.

    Also an IndexError, so the sequence iteration protocol terminates on it.
    """

    def __init__(self, message: str, index: int, bounds: range) -> None:
        super().__init__(message)
        self.index = index
        self.bounds = bounds


@contextmanager
def handle_validation_errors(field: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches pydantic.ValidationError
    and raises InvalidArgumentError instead.

    Args:
        field: Optional field name used when pydantic does not report one

    Usage:
        with handle_validation_errors(field="total_count"):
            count = COUNT_ADAPTER.validate_python(value)
    """
    try:
        yield
    except PydanticValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        loc = first.get("loc") or ()
        name = ".".join(str(part) for part in loc) or field or "unknown"
        raise InvalidArgumentError(
            message=f"Invalid value for '{name}': {first.get('msg', str(e))}",
            field=name,
            value=first.get("input"),
            original_error=e,
        ) from e
