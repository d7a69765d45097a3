"""
Tests for the respondent session state machine.

These tests verify:
    - Answer recording and range checks
    - Page gating on the current page only
    - Submission gating on the whole answer set
    - Reset from any state
    - Observer notification
"""

import pytest
from mai.controls import navigation_controls
from mai.model import CategoryMap, Inventory, QuestionBank, ScoreEntry
from mai.session import (
    IncompleteSubmissionError,
    NavigationError,
    OutOfRangeError,
    PageIncompleteError,
    SessionError,
    SessionFinishedError,
    SessionState,
)


def make_inventory(n=3, per_page=10, categories=None):
    bank = QuestionBank.from_statements([f"Statement {i}" for i in range(n)])
    if categories is None:
        categories = {"K": [0], "P": [1], "C": [2]} if n >= 3 else {}
    return Inventory("T", bank, CategoryMap.from_mapping(categories), per_page=per_page)


@pytest.fixture
def paged_session():
    """5 questions, 2 per page: pages [0,1], [2,3], [4]."""
    return SessionState(make_inventory(n=5, per_page=2, categories={}))


class TestInitialState:
    """Test a fresh session."""

    def test_starts_answering_page_zero(self):
        session = SessionState(make_inventory())
        assert session.current_page == 0
        assert not session.finished
        assert session.answers == (None, None, None)

    def test_total_pages(self, paged_session):
        assert paged_session.total_pages == 3


class TestRecordAnswer:
    """Test record_answer()."""

    def test_sets_slot(self):
        session = SessionState(make_inventory())
        session.record_answer(1, True)
        assert session.answers == (None, True, None)

    def test_overwrites_prior_value(self):
        session = SessionState(make_inventory())
        session.record_answer(1, True)
        session.record_answer(1, False)
        assert session.answers[1] is False

    @pytest.mark.parametrize("bad_id", [-1, 3, 100])
    def test_out_of_range(self, bad_id):
        session = SessionState(make_inventory())
        with pytest.raises(OutOfRangeError):
            session.record_answer(bad_id, True)
        assert session.answers == (None, None, None)

    def test_out_of_range_is_index_error(self):
        session = SessionState(make_inventory())
        with pytest.raises(IndexError):
            session.record_answer(3, True)

    def test_rejects_non_bool(self):
        session = SessionState(make_inventory())
        with pytest.raises(TypeError):
            session.record_answer(0, 1)

    def test_can_answer_questions_on_other_pages(self, paged_session):
        paged_session.record_answer(4, True)
        assert paged_session.answers[4] is True


class TestAdvancePage:
    """Test advance_page() gating."""

    def test_incomplete_page_keeps_current_page(self, paged_session):
        """Advancing with an unset slot on the page leaves the page unchanged."""
        paged_session.record_answer(0, True)
        with pytest.raises(PageIncompleteError) as exc_info:
            paged_session.advance_page()
        assert exc_info.value.unanswered == [1]
        assert paged_session.current_page == 0
        assert not paged_session.can_advance()

    def test_only_current_page_must_be_complete(self, paged_session):
        paged_session.record_answer(0, True)
        paged_session.record_answer(1, False)
        assert paged_session.can_advance()
        paged_session.advance_page()
        assert paged_session.current_page == 1

    def test_cannot_advance_past_last_page(self):
        session = SessionState(make_inventory())
        for i in range(3):
            session.record_answer(i, True)
        assert not session.can_advance()
        with pytest.raises(NavigationError):
            session.advance_page()
        assert session.current_page == 0


class TestRetreatPage:
    """Test retreat_page()."""

    def test_cannot_retreat_from_first_page(self, paged_session):
        assert not paged_session.can_retreat()
        with pytest.raises(NavigationError):
            paged_session.retreat_page()

    def test_retreat_needs_no_answers(self, paged_session):
        paged_session.record_answer(0, True)
        paged_session.record_answer(1, True)
        paged_session.advance_page()
        assert paged_session.can_retreat()
        paged_session.retreat_page()
        assert paged_session.current_page == 0


class TestSubmit:
    """Test submit() gating."""

    def test_incomplete_submission(self):
        session = SessionState(make_inventory())
        session.record_answer(0, True)
        with pytest.raises(IncompleteSubmissionError) as exc_info:
            session.submit()
        assert exc_info.value.unanswered == [1, 2]
        assert not session.finished
        assert not session.can_submit()

    def test_submit_when_all_answered(self):
        session = SessionState(make_inventory())
        for i, value in enumerate([True, False, True]):
            session.record_answer(i, value)
        assert session.can_submit()
        session.submit()
        assert session.finished
        assert session.scores() == [
            ScoreEntry("K", 1, 1),
            ScoreEntry("P", 0, 1),
            ScoreEntry("C", 1, 1),
        ]

    def test_finished_is_terminal(self):
        session = SessionState(make_inventory())
        for i in range(3):
            session.record_answer(i, True)
        session.submit()
        for operation in (lambda: session.record_answer(0, False), session.submit,
                          session.advance_page, session.retreat_page):
            with pytest.raises(SessionFinishedError):
                operation()
        assert session.answers == (True, True, True)

    def test_submit_only_from_last_page(self):
        """Should refuse submit before the last page even when every slot is set."""
        session = SessionState(make_inventory(per_page=1))
        for i in range(3):
            session.record_answer(i, True)
        assert not session.can_submit()
        with pytest.raises(NavigationError):
            session.submit()
        assert not session.finished

        session.advance_page()
        session.advance_page()
        assert session.can_submit()
        session.submit()
        assert session.finished

    def test_finished_session_controls_are_disabled(self):
        """Should disable every navigation control once submitted."""
        session = SessionState(make_inventory(per_page=2))
        for i in range(3):
            session.record_answer(i, True)
        session.advance_page()
        session.submit()
        controls = navigation_controls(session)
        assert [c.label for c in controls] == ["Back", "Submit"]
        assert all(c.disabled for c in controls)

    def test_errors_share_a_base_class(self):
        for cls in (OutOfRangeError, PageIncompleteError, IncompleteSubmissionError,
                    NavigationError, SessionFinishedError):
            assert issubclass(cls, SessionError)


class TestReset:
    """Test reset()."""

    def test_reset_after_finish(self):
        """Reset after finishing returns to Answering(0) with all slots unset."""
        session = SessionState(make_inventory(n=5, per_page=2, categories={}))
        for i in range(5):
            session.record_answer(i, True)
        session.advance_page()
        session.advance_page()
        session.submit()

        session.reset()

        assert session.current_page == 0
        assert not session.finished
        assert session.answers == (None,) * 5

    def test_reset_mid_session(self, paged_session):
        paged_session.record_answer(0, False)
        paged_session.reset()
        assert paged_session.answers == (None,) * 5


class TestDerivedViews:
    """Test recomputed views."""

    def test_visible_questions_follow_page(self, paged_session):
        assert [q.id for q in paged_session.visible_questions()] == [0, 1]
        paged_session.record_answer(0, True)
        paged_session.record_answer(1, True)
        paged_session.advance_page()
        paged_session.record_answer(2, True)
        paged_session.record_answer(3, True)
        paged_session.advance_page()
        assert [q.id for q in paged_session.visible_questions()] == [4]
        assert paged_session.is_last_page()

    def test_progress(self, paged_session):
        assert paged_session.progress() == pytest.approx(100 / 3)

    def test_snapshot_is_detached(self, paged_session):
        snap = paged_session.snapshot()
        paged_session.record_answer(0, True)
        assert snap.answers[0] is None
        assert snap.unanswered == [0, 1, 2, 3, 4]
        assert not snap.all_answered


class TestObservers:
    """Test change notification."""

    def test_observer_receives_snapshots(self, paged_session):
        seen = []
        paged_session.subscribe(seen.append)
        paged_session.record_answer(0, True)
        paged_session.record_answer(1, True)
        paged_session.advance_page()
        assert [s.current_page for s in seen] == [0, 0, 1]
        assert seen[-1].answers[:2] == (True, True)

    def test_failed_operation_does_not_notify(self, paged_session):
        seen = []
        paged_session.subscribe(seen.append)
        with pytest.raises(PageIncompleteError):
            paged_session.advance_page()
        with pytest.raises(NavigationError):
            paged_session.retreat_page()
        assert seen == []

    def test_unsubscribe(self, paged_session):
        seen = []
        unsubscribe = paged_session.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        paged_session.record_answer(0, True)
        assert seen == []

    def test_reset_notifies(self, paged_session):
        seen = []
        paged_session.subscribe(seen.append)
        paged_session.reset()
        assert len(seen) == 1
        assert seen[0].current_page == 0
