"""
Serialization helpers for inventory definitions (Inventory, Question, CategoryDefinition).

Provides lossless JSON/YAML round-trip via intermediate dict representation,
plus load_inventory() which picks the format from a file extension.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from mai.csv_parser import parse_csv_string
from mai.model import (
    CategoryDefinition,
    CategoryMap,
    Inventory,
    InventoryError,
    Question,
    QuestionBank,
)

logger = logging.getLogger(__name__)


_TYPE_NAMES = {int: "an integer", str: "a string", dict: "a mapping", list: "a list"}


def _require_type(value: Any, expected, what: str) -> None:
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and expected is int or not isinstance(value, expected):
        raise InventoryError(f"{what} must be {_TYPE_NAMES.get(expected, expected)}, got {value!r}")


def question_to_dict(q: Question) -> Dict[str, Any]:
    return {"id": q.id, "statement": q.statement, "translation": q.translation}


def question_from_dict(d: Dict[str, Any], position: int) -> Question:
    _require_type(d, dict, f"Question {position}")
    # ids may be omitted in hand-written files; position is authoritative
    qid = d.get("id", position)
    _require_type(qid, int, f"Question {position} id")
    _require_type(d["statement"], str, f"Question {position} statement")
    translation = d.get("translation") or ""
    _require_type(translation, str, f"Question {position} translation")
    return Question(id=qid, statement=d["statement"], translation=translation)


def category_to_dict(c: CategoryDefinition) -> Dict[str, Any]:
    return {"label": c.label, "members": sorted(c.member_ids)}


def category_from_dict(d: Dict[str, Any]) -> CategoryDefinition:
    _require_type(d, dict, "Category")
    _require_type(d["label"], str, "Category label")
    members = d.get("members") or []
    _require_type(members, list, f"Category {d['label']!r} members")
    return CategoryDefinition(label=d["label"], member_ids=frozenset(members))


def inventory_to_dict(inv: Inventory) -> Dict[str, Any]:
    return {
        "name": inv.name,
        "per_page": inv.per_page,
        "chart_max": inv.chart_max,
        "questions": [question_to_dict(q) for q in inv.questions],
        "categories": [category_to_dict(c) for c in inv.categories],
    }


def inventory_from_dict(d: Dict[str, Any]) -> Inventory:
    _require_type(d, dict, "Inventory definition")
    name = d.get("name", "Inventory")
    per_page = d.get("per_page", 10)
    chart_max = d.get("chart_max")
    _require_type(name, str, "Inventory name")
    _require_type(per_page, int, "per_page")
    if chart_max is not None:
        _require_type(chart_max, int, "chart_max")
    question_dicts = d.get("questions") or []
    category_dicts = d.get("categories") or []
    _require_type(question_dicts, list, "questions")
    _require_type(category_dicts, list, "categories")
    try:
        questions = QuestionBank(question_from_dict(q, i) for i, q in enumerate(question_dicts))
        categories = CategoryMap(category_from_dict(c) for c in category_dicts)
    except KeyError as e:
        raise InventoryError(f"Missing required field {e}")
    except (TypeError, AttributeError) as e:
        raise InventoryError(f"Malformed inventory definition: {e}")
    return Inventory(
        name=name,
        questions=questions,
        categories=categories,
        per_page=per_page,
        chart_max=chart_max,
    )


def inventory_to_json(inv: Inventory) -> str:
    return json.dumps(inventory_to_dict(inv), ensure_ascii=False, sort_keys=True)


def inventory_from_json(s: str) -> Inventory:
    d = json.loads(s)
    return inventory_from_dict(d)


def inventory_to_yaml(inv: Inventory) -> str:
    return yaml.safe_dump(inventory_to_dict(inv), allow_unicode=True, sort_keys=False)


def inventory_from_yaml(s: str) -> Inventory:
    d = yaml.safe_load(s)
    return inventory_from_dict(d)


def load_inventory(path: Union[str, Path]) -> Inventory:
    """
    Load an inventory definition from a .yaml/.yml, .json or .csv file.

    CSV files carry questions and category membership only; the inventory
    name defaults to the file stem.

    Raises:
        InventoryError: Unknown extension or invalid definition
        CSVParseError: Malformed CSV definition
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        inventory = inventory_from_yaml(text)
    elif suffix == ".json":
        inventory = inventory_from_json(text)
    elif suffix == ".csv":
        inventory = parse_csv_string(text, inventory_name=path.stem)
    else:
        raise InventoryError(f"Unsupported inventory file type: {path.suffix!r}")
    logger.info(
        "Loaded inventory %s from %s: %d questions, %d categories",
        inventory.name, path, inventory.question_count, len(inventory.categories),
    )
    return inventory
