"""
Tests for page arithmetic.
"""

import pytest
from mai.pagination import is_page_complete, page_slice, progress_percent, total_pages


class TestPageSlice:
    """Test page_slice()."""

    def test_first_page(self):
        assert page_slice(0, 10, 52) == (0, 10)

    def test_last_page_is_short(self):
        assert page_slice(5, 10, 52) == (50, 52)

    def test_page_larger_than_bank(self):
        assert page_slice(0, 10, 3) == (0, 3)

    @pytest.mark.parametrize("total,per_page", [(1, 1), (3, 10), (10, 10), (52, 10), (7, 3), (13, 4)])
    def test_slices_cover_bank_without_overlap(self, total, per_page):
        """Union of all slices should be exactly [0, total) with no overlap."""
        covered = []
        for page in range(total_pages(total, per_page)):
            start, end = page_slice(page, per_page, total)
            assert 0 < end - start <= per_page
            covered.extend(range(start, end))
        assert covered == list(range(total))

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            page_slice(0, 0, 3)
        with pytest.raises(ValueError):
            page_slice(-1, 10, 3)


class TestTotalPages:
    """Test total_pages()."""

    @pytest.mark.parametrize("total,per_page,expected", [(3, 10, 1), (10, 10, 1), (11, 10, 2), (52, 10, 6), (0, 10, 0)])
    def test_ceiling(self, total, per_page, expected):
        assert total_pages(total, per_page) == expected


class TestCompleteness:
    """Test is_page_complete()."""

    def test_complete(self):
        assert is_page_complete([True, False, None], 0, 2)

    def test_incomplete(self):
        assert not is_page_complete([True, None, True], 0, 3)

    def test_ignores_slots_outside_range(self):
        assert is_page_complete([None, True, False], 1, 3)

    def test_empty_range_is_complete(self):
        assert is_page_complete([None], 1, 1)


def test_progress_percent():
    assert progress_percent(0, 1) == 100
    assert progress_percent(0, 4) == 25
    assert progress_percent(2, 4) == 75
    with pytest.raises(ValueError):
        progress_percent(0, 0)
