"""
Unit tests for the PageLayout configuration model.

Tests the frozen pydantic model that stores page geometry and its arithmetic.
"""

import pytest
from pydantic import ValidationError

from pagedarray.config import PageLayout


@pytest.mark.unit
class TestPageLayout:
    """Test PageLayout model."""

    def test_layout_creation(self) -> None:
        """Test basic PageLayout creation."""
        layout = PageLayout(page_length=25, origin_page=0)

        assert layout.page_length == 25
        assert layout.origin_page == 0

    def test_layout_defaults(self) -> None:
        """Test PageLayout with default origin page."""
        layout = PageLayout(page_length=25)
        assert layout.origin_page == 1

    def test_page_length_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            PageLayout(page_length=0)

    def test_layout_is_frozen(self) -> None:
        layout = PageLayout(page_length=3)

        with pytest.raises(ValidationError):
            layout.page_length = 4

    def test_layout_equality(self) -> None:
        assert PageLayout(page_length=3) == PageLayout(page_length=3, origin_page=1)
        assert PageLayout(page_length=3) != PageLayout(page_length=3, origin_page=0)

    @pytest.mark.parametrize(
        ("total", "expected"),
        [(0, 0), (1, 1), (3, 1), (4, 2), (9, 3), (10, 4)],
    )
    def test_page_count(self, total, expected) -> None:
        assert PageLayout(page_length=3).page_count(total) == expected

    def test_terminal_page(self) -> None:
        layout = PageLayout(page_length=4, origin_page=1)

        assert layout.terminal_page(10) == 3
        assert layout.terminal_page(0) == 0

    def test_page_for_offset_and_start(self) -> None:
        layout = PageLayout(page_length=4, origin_page=0)

        assert layout.page_for_offset(7) == 1
        assert layout.page_start(1) == 4
        assert layout.page_start(layout.page_for_offset(9)) == 8
