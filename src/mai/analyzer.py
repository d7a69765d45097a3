"""
Inventory Analyzer — diagnostics for inventory definitions.

This module provides lightweight analysis of Inventory objects:
    - Category coverage (uncategorised questions)
    - Overlapping membership
    - Empty categories
    - Chart axis sanity

IMPORTANT: It does NOT modify the inventory.
It only produces read-only reports.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

from mai.model import Inventory
from mai.pagination import total_pages

logger = logging.getLogger(__name__)


@dataclass
class InventoryReport:
    """Analysis report for an inventory definition."""

    inventory_name: str
    total_questions: int = 0
    total_categories: int = 0
    total_pages: int = 0

    # Coverage
    uncategorised_questions: List[int] = field(default_factory=list)
    shared_questions: Dict[int, List[str]] = field(default_factory=dict)
    empty_categories: List[str] = field(default_factory=list)
    category_coverage_percent: float = 0.0

    # Chart axis
    largest_category_total: int = 0
    chart_max: int = 0

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_inventory(inventory: Inventory) -> InventoryReport:
    """
    Analyze an inventory definition.

    Checks for:
    - Questions that no category counts
    - Questions counted by more than one category
    - Categories with no members
    - A chart axis maximum below the largest category total

    Returns an InventoryReport with metrics and warnings.
    """
    report = InventoryReport(inventory_name=inventory.name)
    report.total_questions = inventory.question_count
    report.total_categories = len(inventory.categories)
    report.total_pages = total_pages(inventory.question_count, inventory.per_page)

    membership: Dict[int, List[str]] = defaultdict(list)
    for category in inventory.categories:
        if not category.member_ids:
            report.empty_categories.append(category.label)
        for qid in sorted(category.member_ids):
            membership[qid].append(category.label)

    report.uncategorised_questions = [q.id for q in inventory.questions if q.id not in membership]
    report.shared_questions = {qid: labels for qid, labels in sorted(membership.items()) if len(labels) > 1}
    if report.total_questions:
        covered = report.total_questions - len(report.uncategorised_questions)
        report.category_coverage_percent = covered / report.total_questions * 100

    report.largest_category_total = max((c.total for c in inventory.categories), default=0)
    report.chart_max = inventory.chart_max

    if report.uncategorised_questions:
        report.add_warning(
            f"{len(report.uncategorised_questions)} question(s) are not scored by any category: "
            f"{report.uncategorised_questions}"
        )
    for qid, labels in report.shared_questions.items():
        report.add_warning(f"Question {qid} is scored by several categories: {labels}")
    for label in report.empty_categories:
        report.add_warning(f"Category {label!r} has no questions")
    if report.chart_max < report.largest_category_total:
        report.add_warning(
            f"chart_max {report.chart_max} is below the largest category total "
            f"{report.largest_category_total}; bars may be clipped"
        )

    for warning in report.warnings:
        logger.warning("%s: %s", inventory.name, warning)

    return report
