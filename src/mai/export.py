"""
Result export helpers.

Turns ScoreEntry lists into:
    - table rows {Category, Score, Total}
    - comma-delimited text with a Category,Score,Total header
    - a chart series (labels + values) for a bar-chart renderer
    - the plain "label: score / total" summary lines

Row order always follows the category map's declared order.
"""
from __future__ import annotations

import csv
from dataclasses import dataclass, field
from io import StringIO
from typing import Dict, List, Sequence, Union

from mai.model import ScoreEntry

CSV_HEADER = ["Category", "Score", "Total"]

Row = Dict[str, Union[str, int]]


@dataclass(frozen=True)
class ChartSeries:
    """Bar-chart input: one label and one value per category."""
    labels: List[str] = field(default_factory=list)
    values: List[int] = field(default_factory=list)


def to_table(scores: Sequence[ScoreEntry]) -> List[Row]:
    return [{"Category": s.label, "Score": s.score, "Total": s.total} for s in scores]


def table_to_csv(rows: Sequence[Row]) -> str:
    """
    Serialize table rows as CSV text.

    Fields containing a comma, quote or line break are quoted and inner
    quotes doubled. Lines end with '\\n'; there is no trailing metadata.
    """
    lines = [_csv_line(dict(zip(CSV_HEADER, CSV_HEADER)))]
    lines.extend(_csv_line(row) for row in rows)
    return "".join(lines)


def _csv_line(row: Row) -> str:
    # csv only quotes for characters in its lineterminator, so write with
    # \r\n to quote any field holding \r or \n, then swap the terminator.
    buffer = StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_HEADER, lineterminator="\r\n")
    writer.writerow(row)
    return buffer.getvalue()[:-2] + "\n"


def scores_to_csv(scores: Sequence[ScoreEntry]) -> str:
    return table_to_csv(to_table(scores))


def parse_csv_table(text: str) -> List[Row]:
    """
    Parse exported CSV text back into table rows.

    Raises:
        ValueError: If the header is not Category,Score,Total or a
            Score/Total field is not an integer
    """
    reader = csv.DictReader(StringIO(text))
    if reader.fieldnames != CSV_HEADER:
        raise ValueError(f"Expected header {CSV_HEADER}, got {reader.fieldnames}")
    rows = []
    for row in reader:
        rows.append({
            "Category": row["Category"],
            "Score": int(row["Score"]),
            "Total": int(row["Total"]),
        })
    return rows


def to_chart_series(scores: Sequence[ScoreEntry]) -> ChartSeries:
    return ChartSeries(labels=[s.label for s in scores], values=[s.score for s in scores])


def format_score_lines(scores: Sequence[ScoreEntry]) -> List[str]:
    return [f"{s.label}: {s.score} / {s.total}" for s in scores]


def export_filename(inventory_name: str) -> str:
    return f"{inventory_name}_scores.csv"
