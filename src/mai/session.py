"""
Respondent Session State Machine

SessionState is the only mutable object in the package. It owns the
answer slots, the current page and the finished flag.

States:
    Answering(page) -> Answering(page+1) -> ... -> Finished

Transitions:
    Answering(p) --advance_page [page p complete, p < last]--> Answering(p+1)
    Answering(p) --retreat_page [p > 0]--> Answering(p-1)
    Answering(last) --submit [every slot set]--> Finished
    any --reset--> Answering(0)

ARCHITECTURAL RULE:
    Nothing derived is stored here.
    Page slices, completeness, progress and scores are recomputed
    from a SessionSnapshot every time they are asked for.

Observers registered with subscribe() receive the new snapshot after
every successful mutation. A rejected operation leaves the state
untouched and notifies nobody.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from mai.model import Answer, AnswerSet, Inventory, Question, ScoreEntry
from mai.pagination import is_page_complete, page_slice, progress_percent, total_pages
from mai.scoring import compute_scores

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for rejected session operations."""
    pass


class OutOfRangeError(SessionError, IndexError):
    """Question id outside [0, question_count). A caller bug, not user input."""
    pass


class PageIncompleteError(SessionError):
    """advance_page() attempted while the current page has unset answers."""

    def __init__(self, page: int, unanswered: List[int]):
        self.page = page
        self.unanswered = unanswered
        super().__init__(f"Page {page} has unanswered questions: {unanswered}")


class IncompleteSubmissionError(SessionError):
    """submit() attempted while some answers are unset."""

    def __init__(self, unanswered: List[int]):
        self.unanswered = unanswered
        super().__init__(f"{len(unanswered)} question(s) unanswered: {unanswered}")


class NavigationError(SessionError):
    """Page move past the first or last page, or submit before the last page."""
    pass


class SessionFinishedError(SessionError):
    """Mutation attempted after submit(); only reset() is allowed."""
    pass


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Immutable view of a session at one instant.

    Every derived value is a pure function of a snapshot plus the
    static inventory.
    """

    answers: AnswerSet
    current_page: int
    finished: bool

    @property
    def unanswered(self) -> List[int]:
        return [i for i, a in enumerate(self.answers) if a is None]

    @property
    def all_answered(self) -> bool:
        return all(a is not None for a in self.answers)


Observer = Callable[[SessionSnapshot], None]


class SessionState:
    """
    One respondent's in-progress or completed answer set.

    Example:
        session = SessionState(inventory)
        session.record_answer(0, True)
        session.advance_page()
        ...
        session.submit()
        session.scores()
    """

    def __init__(self, inventory: Inventory):
        self.inventory = inventory
        self._answers: List[Answer] = [None] * inventory.question_count
        self._current_page = 0
        self._finished = False
        self._observers: List[Observer] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a change callback.

        Returns:
            A function that removes the callback again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        snap = self.snapshot()
        for observer in list(self._observers):
            observer(snap)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            answers=tuple(self._answers),
            current_page=self._current_page,
            finished=self._finished,
        )

    @property
    def answers(self) -> AnswerSet:
        return tuple(self._answers)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def total_pages(self) -> int:
        return total_pages(self.inventory.question_count, self.inventory.per_page)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def page_slice(self) -> Tuple[int, int]:
        return page_slice(self._current_page, self.inventory.per_page, self.inventory.question_count)

    def visible_questions(self) -> List[Question]:
        start, end = self.page_slice()
        return list(self.inventory.questions[start:end])

    def is_last_page(self) -> bool:
        return self._current_page == self.total_pages - 1

    def is_current_page_complete(self) -> bool:
        start, end = self.page_slice()
        return is_page_complete(self._answers, start, end)

    def can_advance(self) -> bool:
        return not self._finished and not self.is_last_page() and self.is_current_page_complete()

    def can_retreat(self) -> bool:
        return not self._finished and self._current_page > 0

    def can_submit(self) -> bool:
        return not self._finished and self.is_last_page() and all(a is not None for a in self._answers)

    def progress(self) -> float:
        return progress_percent(self._current_page, self.total_pages)

    def scores(self) -> List[ScoreEntry]:
        return compute_scores(self._answers, self.inventory.categories)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _ensure_open(self, operation: str) -> None:
        if self._finished:
            raise SessionFinishedError(f"Cannot {operation}: session already submitted")

    def record_answer(self, question_id: int, value: bool) -> None:
        """
        Set the answer slot for one question. Overwrites any prior value.

        Raises:
            OutOfRangeError: question_id not in [0, question_count)
            TypeError: value is not a bool
            SessionFinishedError: session already submitted
        """
        count = self.inventory.question_count
        if isinstance(question_id, bool) or not isinstance(question_id, int) or not 0 <= question_id < count:
            raise OutOfRangeError(f"Question id {question_id!r} outside [0, {count})")
        if not isinstance(value, bool):
            raise TypeError(f"Answer must be True or False, got {value!r}")
        self._ensure_open("record answer")

        self._answers[question_id] = value
        logger.debug("Recorded answer %s for question %d", value, question_id)
        self._notify()

    def advance_page(self) -> None:
        """
        Move to the next page.

        Raises:
            PageIncompleteError: the current page has unset answers
            NavigationError: already on the last page
            SessionFinishedError: session already submitted
        """
        self._ensure_open("advance page")
        start, end = self.page_slice()
        if not is_page_complete(self._answers, start, end):
            unanswered = [i for i in range(start, end) if self._answers[i] is None]
            raise PageIncompleteError(self._current_page, unanswered)
        if self.is_last_page():
            raise NavigationError("Already on the last page; submit instead")

        self._current_page += 1
        logger.debug("Advanced to page %d of %d", self._current_page, self.total_pages)
        self._notify()

    def retreat_page(self) -> None:
        """
        Move to the previous page. No completeness requirement.

        Raises:
            NavigationError: already on the first page
            SessionFinishedError: session already submitted
        """
        self._ensure_open("retreat page")
        if self._current_page == 0:
            raise NavigationError("Already on the first page")

        self._current_page -= 1
        logger.debug("Retreated to page %d of %d", self._current_page, self.total_pages)
        self._notify()

    def submit(self) -> None:
        """
        Finish the session. Only allowed from the last page.

        Raises:
            NavigationError: not on the last page
            IncompleteSubmissionError: some answer slots are unset
            SessionFinishedError: session already submitted
        """
        self._ensure_open("submit")
        if not self.is_last_page():
            raise NavigationError("Submit is only available on the last page")
        unanswered = [i for i, a in enumerate(self._answers) if a is None]
        if unanswered:
            raise IncompleteSubmissionError(unanswered)

        self._finished = True
        logger.info("Session for %s submitted", self.inventory.name)
        self._notify()

    def reset(self) -> None:
        """Clear every answer and return to Answering(0)."""
        self._answers = [None] * self.inventory.question_count
        self._current_page = 0
        self._finished = False
        logger.info("Session for %s reset", self.inventory.name)
        self._notify()
