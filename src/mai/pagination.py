"""
Page arithmetic for the question bank.

All functions here are pure. A page is a fixed-size contiguous slice
of question ids; the last page may be shorter.
"""

from typing import Sequence, Tuple

from mai.model import Answer


def _check_per_page(per_page: int) -> None:
    if per_page < 1:
        raise ValueError(f"per_page must be at least 1, got {per_page}")


def page_slice(page: int, per_page: int, total_questions: int) -> Tuple[int, int]:
    """
    Compute the half-open id range [start, end) shown on a page.

    Args:
        page: 0-based page index
        per_page: Questions per page
        total_questions: Size of the question bank

    Returns:
        (start, end) with end - start <= per_page
    """
    _check_per_page(per_page)
    if page < 0:
        raise ValueError(f"page must be non-negative, got {page}")
    start = page * per_page
    end = min(start + per_page, total_questions)
    return start, end


def total_pages(total_questions: int, per_page: int) -> int:
    """Number of pages needed to show every question (ceiling division)."""
    _check_per_page(per_page)
    return -(-total_questions // per_page)


def is_page_complete(answers: Sequence[Answer], start: int, end: int) -> bool:
    """True iff no slot in [start, end) is unset."""
    return all(answers[i] is not None for i in range(start, end))


def progress_percent(current_page: int, page_count: int) -> float:
    """Progress indicator value: (current_page + 1) / page_count * 100."""
    if page_count < 1:
        raise ValueError(f"page_count must be at least 1, got {page_count}")
    return (current_page + 1) / page_count * 100
