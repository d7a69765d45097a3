"""
Core Inventory Model Objects

Defines the static data structures of an inventory:
    - Questions (statements with a parallel translation)
    - Categories (named groups of question ids)
    - Inventory (root container)
    - ScoreEntry (derived per-category tally)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable once built
        - Use 0-based question ids everywhere
        - Validate their references at construction
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from collections.abc import Sequence
from typing import Iterable, Iterator, List, Optional, Tuple, Union


# A single answer slot: None (unset), True (endorsed) or False (not endorsed).
Answer = Optional[bool]
AnswerSet = Tuple[Answer, ...]


class InventoryError(ValueError):
    """Raised when an inventory definition violates its invariants."""
    pass


@dataclass(frozen=True)
class Question:
    """
    A single inventory statement.

    Properties:
        id:
            0-based ordinal position in the question bank (immutable)

        statement:
            Primary-language statement text

        translation:
            Parallel translated statement (may be empty)
    """

    id: int
    statement: str
    translation: str = ""

    @property
    def number(self) -> int:
        """1-based display number."""
        return self.id + 1


@dataclass(frozen=True)
class CategoryDefinition:
    """
    A named group of questions whose affirmative answers are tallied together.

    Example:
        CategoryDefinition("Procedural Knowledge", frozenset({1, 12, 26}))

    member_ids are 0-based question ids.
    """

    label: str
    member_ids: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable of ids but always store a frozenset
        if not isinstance(self.member_ids, frozenset):
            object.__setattr__(self, "member_ids", frozenset(self.member_ids))

    @property
    def total(self) -> int:
        return len(self.member_ids)


class QuestionBank(Sequence):
    """
    Fixed, ordered list of questions.

    INVARIANTS:
        - At least one question
        - Question ids are exactly 0..n-1, in order
    """

    def __init__(self, questions: Iterable[Question]):
        self._questions: Tuple[Question, ...] = tuple(questions)
        if not self._questions:
            raise InventoryError("Question bank must contain at least one question")
        for position, question in enumerate(self._questions):
            if question.id != position:
                raise InventoryError(
                    f"Question at position {position} has id {question.id}; "
                    f"ids must be 0-based and sequential"
                )

    @classmethod
    def from_statements(cls, statements: Iterable[Union[str, Tuple[str, str]]]) -> "QuestionBank":
        """
        Build a bank from plain statements or (statement, translation) pairs.
        Ids are assigned from position.
        """
        questions = []
        for position, entry in enumerate(statements):
            if isinstance(entry, str):
                questions.append(Question(id=position, statement=entry))
            else:
                statement, translation = entry
                questions.append(Question(id=position, statement=statement, translation=translation))
        return cls(questions)

    def __getitem__(self, index):
        return self._questions[index]

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __eq__(self, other) -> bool:
        if not isinstance(other, QuestionBank):
            return NotImplemented
        return self._questions == other._questions

    def __hash__(self) -> int:
        return hash(self._questions)

    def __repr__(self) -> str:
        return f"QuestionBank({len(self._questions)} questions)"


class CategoryMap(Sequence):
    """
    Ordered mapping from category label to member question ids.

    Declaration order is preserved; scores, CSV rows and chart bars
    all follow it.

    INVARIANTS:
        - Labels are unique
        - Member ids are non-negative integers
        - When validated against a bank, every member id < len(bank)
    """

    def __init__(self, categories: Iterable[CategoryDefinition]):
        self._categories: Tuple[CategoryDefinition, ...] = tuple(categories)
        seen = set()
        for category in self._categories:
            if category.label in seen:
                raise InventoryError(f"Duplicate category label: {category.label!r}")
            seen.add(category.label)
            for member_id in category.member_ids:
                if not isinstance(member_id, int) or isinstance(member_id, bool) or member_id < 0:
                    raise InventoryError(
                        f"Category {category.label!r} has invalid member id {member_id!r}"
                    )

    @classmethod
    def from_mapping(cls, mapping) -> "CategoryMap":
        """Build from a {label: [ids]} mapping, keeping its iteration order."""
        return cls(CategoryDefinition(label, frozenset(ids)) for label, ids in mapping.items())

    def validate(self, question_count: int) -> None:
        """
        Check every member id refers to an existing question.

        Raises:
            InventoryError: If a member id is outside [0, question_count)
        """
        for category in self._categories:
            bad = sorted(i for i in category.member_ids if i >= question_count)
            if bad:
                raise InventoryError(
                    f"Category {category.label!r} references unknown question ids {bad} "
                    f"(bank has {question_count} questions)"
                )

    @property
    def labels(self) -> List[str]:
        return [c.label for c in self._categories]

    def get(self, label: str) -> Optional[CategoryDefinition]:
        """
        Retrieve a category by label.

        Returns:
            CategoryDefinition or None if not found
        """
        for category in self._categories:
            if category.label == label:
                return category
        return None

    def __getitem__(self, index):
        return self._categories[index]

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[CategoryDefinition]:
        return iter(self._categories)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CategoryMap):
            return NotImplemented
        return self._categories == other._categories

    def __hash__(self) -> int:
        return hash(self._categories)

    def __repr__(self) -> str:
        return f"CategoryMap({self.labels!r})"


@dataclass(frozen=True)
class Inventory:
    """
    Root container for a complete inventory definition.

    This is loaded once at startup and never altered.

    Properties:
        name:
            Inventory identifier, also used for the export filename
            (e.g. "MAI" -> "MAI_scores.csv")

        questions:
            QuestionBank

        categories:
            CategoryMap, validated against questions

        per_page:
            Number of questions shown per page

        chart_max:
            Fixed y-axis maximum for the results chart.
            Defaults to the largest category total when not given.

    INVARIANTS:
        - per_page >= 1
        - Every category member id refers to a question in the bank
        - chart_max >= 0
    """

    name: str
    questions: QuestionBank
    categories: CategoryMap
    per_page: int = 10
    chart_max: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.questions, QuestionBank):
            object.__setattr__(self, "questions", QuestionBank(self.questions))
        if not isinstance(self.categories, CategoryMap):
            object.__setattr__(self, "categories", CategoryMap(self.categories))
        if self.per_page < 1:
            raise InventoryError(f"per_page must be at least 1, got {self.per_page}")
        self.categories.validate(len(self.questions))
        if self.chart_max is None:
            largest = max((c.total for c in self.categories), default=0)
            object.__setattr__(self, "chart_max", largest)
        elif self.chart_max < 0:
            raise InventoryError(f"chart_max must be non-negative, got {self.chart_max}")

    @property
    def question_count(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class ScoreEntry:
    """
    Derived per-category tally. Never stored; recomputed on demand.

    INVARIANT: 0 <= score <= total
    """

    label: str
    score: int
    total: int
