"""
CSV Parser for inventory definitions (raw spreadsheet → Inventory).

CSV Format:
    statement, translation, categories

Syntax Notes:
    - One row per question; question ids are 0-based row order
    - translation may be empty
    - categories is a ';'-separated list of category labels
    - Categories are declared in order of first appearance
"""

import csv
import warnings
from dataclasses import dataclass, field
from io import StringIO
from typing import Dict, List, Optional

from mai.model import CategoryDefinition, CategoryMap, Inventory, InventoryError, Question, QuestionBank


class CSVParseError(Exception):
    """Raised when CSV parsing fails."""
    pass


REQUIRED_COLUMNS = ["statement"]


@dataclass
class CSVRow:
    """Parsed CSV row."""
    statement: str
    translation: str = ""
    categories: List[str] = field(default_factory=list)


def _split_categories(cell: str) -> List[str]:
    labels = []
    for part in cell.split(";"):
        label = part.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def _parse_csv_rows(csv_content: str) -> List[CSVRow]:
    """Parse CSV content into structured rows."""
    # Spreadsheet exports often start with a UTF-8 byte order mark
    if csv_content.startswith("\ufeff"):
        csv_content = csv_content[1:]
    reader = csv.DictReader(StringIO(csv_content))

    if reader.fieldnames is None:
        raise CSVParseError("CSV is empty")

    fieldnames = [name.strip() for name in reader.fieldnames]
    missing = [col for col in REQUIRED_COLUMNS if col not in fieldnames]
    if missing:
        raise CSVParseError(f"Missing required columns: {missing}")
    reader.fieldnames = fieldnames

    rows = []
    for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is line 1)
        statement = (row.get("statement") or "").strip()
        if not statement:
            raise CSVParseError(f"Row {row_num} has an empty statement")
        rows.append(CSVRow(
            statement=statement,
            translation=(row.get("translation") or "").strip(),
            categories=_split_categories(row.get("categories") or ""),
        ))

    return rows


def parse_csv_string(
    csv_content: str,
    inventory_name: str = "Inventory",
    per_page: int = 10,
    chart_max: Optional[int] = None,
) -> Inventory:
    """
    Parse CSV content into an Inventory.

    Args:
        csv_content: CSV as string
        inventory_name: Name for the inventory
        per_page: Questions per page
        chart_max: Fixed chart axis maximum (defaults to the largest category)

    Returns:
        Inventory with questions and categories

    Raises:
        CSVParseError: If parsing fails or the result is not a valid inventory
    """
    rows = _parse_csv_rows(csv_content)

    if not rows:
        raise CSVParseError("CSV has a header but no questions")

    members: Dict[str, List[int]] = {}
    questions = []
    for qid, row in enumerate(rows):
        questions.append(Question(id=qid, statement=row.statement, translation=row.translation))
        if not row.categories:
            warnings.warn(f"Question {qid} ({row.statement!r}) belongs to no category", UserWarning)
        for label in row.categories:
            members.setdefault(label, []).append(qid)

    try:
        return Inventory(
            name=inventory_name,
            questions=QuestionBank(questions),
            categories=CategoryMap(CategoryDefinition(label, frozenset(ids)) for label, ids in members.items()),
            per_page=per_page,
            chart_max=chart_max,
        )
    except InventoryError as e:
        raise CSVParseError(f"Invalid inventory: {str(e)}")


def parse_csv_file(filepath: str, inventory_name: Optional[str] = None, **kwargs) -> Inventory:
    """
    Parse a CSV file into an Inventory.

    Args:
        filepath: Path to CSV file
        inventory_name: Name for the inventory (default: filename stem)

    Returns:
        Inventory object
    """
    import os

    if inventory_name is None:
        inventory_name = os.path.splitext(os.path.basename(filepath))[0]

    with open(filepath, "r", encoding="utf-8", newline="") as f:
        csv_content = f.read()

    return parse_csv_string(csv_content, inventory_name=inventory_name, **kwargs)


__all__ = [
    "parse_csv_string",
    "parse_csv_file",
    "CSVParseError",
]
