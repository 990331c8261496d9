from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Validates total counts; strict so bools and numeric strings are rejected
COUNT_ADAPTER: TypeAdapter[int] = TypeAdapter(Annotated[int, Field(ge=0, strict=True)])


class PageLayout(BaseModel):
    """
    Immutable page geometry of a PagedArray.

    Holds the page length and the number of the first page, and owns the
    arithmetic that depends only on them (and on a total count passed in).
    """

    model_config = ConfigDict(frozen=True)

    page_length: int = Field(ge=1, strict=True)
    origin_page: int = Field(default=1, strict=True)

    def page_count(self, total: int) -> int:
        """
        Number of pages needed to hold `total` items.

        Args:
            total: Total logical length of the sequence

        Returns:
            ceil(total / page_length)
        """
        return -(-total // self.page_length)

    def terminal_page(self, total: int) -> int:
        """Highest page number for `total` items (origin_page - 1 when empty)."""
        return self.origin_page + self.page_count(total) - 1

    def page_for_offset(self, index: int) -> int:
        return self.origin_page + index // self.page_length

    def page_start(self, page: int) -> int:
        """First logical index covered by `page`."""
        return (page - self.origin_page) * self.page_length
