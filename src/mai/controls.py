"""
Widget descriptors for a respondent session.

These are the boundary objects handed to whatever draws the form:
    - two AnswerControls (True / False) per visible question
    - Back plus either Next or Submit
    - the progress percentage

Nothing here renders anything. Each call derives fresh descriptors from
the session, so a renderer simply rebuilds them in its change observer.
"""

from dataclasses import dataclass
from typing import Callable, List

from mai.model import Question
from mai.session import SessionState

TRUE_LABEL = "True"
FALSE_LABEL = "False"
BACK_LABEL = "Back"
NEXT_LABEL = "Next"
SUBMIT_LABEL = "Submit"


@dataclass(frozen=True)
class AnswerControl:
    label: str
    selected: bool
    on_activate: Callable[[], None]


@dataclass(frozen=True)
class NavigationControl:
    label: str
    disabled: bool
    on_activate: Callable[[], None]


@dataclass(frozen=True)
class QuestionView:
    """A visible question with its display number and its two answer controls."""
    question: Question
    controls: List[AnswerControl]

    @property
    def number(self) -> int:
        return self.question.number

    @property
    def statement(self) -> str:
        return self.question.statement

    @property
    def translation(self) -> str:
        return self.question.translation


def _answer_control(session: SessionState, question_id: int, value: bool) -> AnswerControl:
    return AnswerControl(
        label=TRUE_LABEL if value else FALSE_LABEL,
        selected=session.answers[question_id] is value,
        on_activate=lambda: session.record_answer(question_id, value),
    )


def question_views(session: SessionState) -> List[QuestionView]:
    """Descriptors for the questions on the current page."""
    return [
        QuestionView(
            question=q,
            controls=[_answer_control(session, q.id, True), _answer_control(session, q.id, False)],
        )
        for q in session.visible_questions()
    ]


def navigation_controls(session: SessionState) -> List[NavigationControl]:
    """
    Back, then Next on every page but the last, or Submit on the last page.

    Disabled flags mirror the session's guards, so activating an enabled
    control never raises.
    """
    controls = [NavigationControl(BACK_LABEL, not session.can_retreat(), session.retreat_page)]
    if session.is_last_page():
        controls.append(NavigationControl(SUBMIT_LABEL, not session.can_submit(), session.submit))
    else:
        controls.append(NavigationControl(NEXT_LABEL, not session.can_advance(), session.advance_page))
    return controls
