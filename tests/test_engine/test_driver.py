"""Tests for the presentation driver state machine."""

import pytest
from pydantic import ValidationError

from quiz_session.engine.driver import QuizDriver
from quiz_session.engine.errors import (
    EmptySelectionError,
    InvalidOptionError,
    OptionsLockedError,
    PrematureAdvanceError,
)
from quiz_session.engine.states import (
    AdvanceRequested,
    Answered,
    Completed,
    ConfirmRequested,
    OptionSelected,
    Presenting,
)
from quiz_session.engine.views import CompletionView, FeedbackView, OptionMark, QuestionView
from quiz_session.models.quiz import Question, QuestionSet, Tier


def answer_all(quiz: QuizDriver) -> None:
    """Answer the sample questions: correct, correct, wrong."""
    quiz.select(2)
    quiz.advance()
    quiz.select(1)
    quiz.select(3)
    quiz.confirm()
    quiz.advance()
    quiz.select(1)
    quiz.advance()


class TestInitialState:
    """Test where a driver starts."""

    def test_starts_presenting_first_question(self, driver: QuizDriver, renderer):
        assert driver.state == Presenting(index=0)
        assert renderer.kinds == ["question"]
        assert renderer.last("question").number == 1

    def test_label_comes_from_question_set(self, driver: QuizDriver):
        assert driver.label == "React Basics"

    def test_explicit_label_wins(self, sample_question_set: QuestionSet, sample_tiers):
        quiz = QuizDriver(sample_question_set, label="Stage 2", tiers=sample_tiers)
        assert quiz.label == "Stage 2"

    def test_accepts_plain_question_list(self, sample_questions: list[Question], sample_tiers):
        quiz = QuizDriver(sample_questions, label="Plain", tiers=sample_tiers)

        assert quiz.state == Presenting(index=0)
        assert quiz.label == "Plain"

    def test_empty_question_list_is_completed(self, renderer, sample_tiers):
        quiz = QuizDriver([], renderer=renderer, tiers=sample_tiers)
        quiz.start()

        assert isinstance(quiz.state, Completed)
        stats = quiz.get_stats()
        assert stats.total_count == 0
        assert stats.accuracy_percent == 0
        assert renderer.kinds == ["completion"]

    def test_works_without_renderer(self, sample_questions: list[Question], sample_tiers):
        quiz = QuizDriver(sample_questions, tiers=sample_tiers)

        quiz.start()
        quiz.select(2)

        assert isinstance(quiz.state, Answered)

    def test_default_tiers_come_from_settings(self, sample_questions: list[Question]):
        quiz = QuizDriver(sample_questions[:1])
        quiz.select(2)
        quiz.advance()

        view = quiz.completion_view()
        assert view.tier is not None
        assert view.tier.min_percent == 90


class TestSingleChoice:
    """Single choice and judge questions confirm on selection."""

    def test_select_confirms_immediately(self, driver: QuizDriver, renderer):
        state = driver.select(2)

        assert isinstance(state, Answered)
        assert state.index == 0
        assert state.record.is_correct is True
        assert state.record.selected_indices == {2}
        assert renderer.kinds == ["question", "feedback"]

    def test_options_are_locked_after_answer(self, driver: QuizDriver):
        driver.select(0)

        with pytest.raises(OptionsLockedError):
            driver.select(2)

        assert driver.session.correct_count == 0
        assert len(driver.session.answers) == 1

    def test_unknown_option_is_rejected(self, driver: QuizDriver):
        with pytest.raises(InvalidOptionError):
            driver.select(4)

        assert driver.state == Presenting(index=0)

    def test_bool_is_not_an_option_index(self, driver: QuizDriver):
        with pytest.raises(InvalidOptionError):
            driver.select(True)

        assert driver.state == Presenting(index=0)
        assert driver.session.answers == ()

    def test_judge_behaves_like_single(self, driver: QuizDriver):
        driver.select(2)
        driver.advance()
        driver.select(1)
        driver.select(3)
        driver.confirm()
        driver.advance()

        state = driver.select(0)

        assert isinstance(state, Answered)
        assert state.record.is_correct is True


class TestMultipleChoice:
    """Multiple choice questions toggle and need confirmation."""

    @pytest.fixture
    def at_multiple(self, driver: QuizDriver) -> QuizDriver:
        driver.select(2)
        driver.advance()
        return driver

    def test_select_toggles_pending(self, at_multiple: QuizDriver):
        at_multiple.select(1)
        at_multiple.select(3)
        assert at_multiple.state == Presenting(index=1, pending=frozenset({1, 3}))

        at_multiple.select(1)
        assert at_multiple.state == Presenting(index=1, pending=frozenset({3}))

    def test_pending_selection_is_rendered(self, at_multiple: QuizDriver, renderer):
        at_multiple.select(1)

        view = renderer.last("question")
        assert view.can_confirm is True
        assert [o.selected for o in view.options] == [False, True, False, False]

    def test_confirm_with_empty_selection_is_rejected(self, at_multiple: QuizDriver):
        with pytest.raises(EmptySelectionError):
            at_multiple.confirm()

        assert at_multiple.state == Presenting(index=1)
        assert len(at_multiple.session.answers) == 1

    def test_deselecting_everything_disables_confirm(self, at_multiple: QuizDriver):
        at_multiple.select(1)
        at_multiple.select(1)

        with pytest.raises(EmptySelectionError):
            at_multiple.confirm()

    def test_confirm_records_set_answer(self, at_multiple: QuizDriver):
        at_multiple.select(3)
        at_multiple.select(1)

        state = at_multiple.confirm()

        assert isinstance(state, Answered)
        assert state.record.is_correct is True
        assert at_multiple.session.correct_count == 2

    def test_partial_answer_is_wrong(self, at_multiple: QuizDriver, renderer):
        at_multiple.select(1)
        at_multiple.confirm()

        feedback = renderer.last("feedback")
        assert feedback.is_correct is False
        marks = [o.mark for o in feedback.question.options]
        assert marks == [
            OptionMark.NEUTRAL,
            OptionMark.CORRECT,
            OptionMark.NEUTRAL,
            OptionMark.CORRECT,
        ]


class TestAdvance:
    """Test moving between questions."""

    def test_advance_before_answer_is_rejected(self, driver: QuizDriver):
        with pytest.raises(PrematureAdvanceError):
            driver.advance()

        assert driver.state == Presenting(index=0)

    def test_advance_presents_next_question(self, driver: QuizDriver, renderer):
        driver.select(2)

        state = driver.advance()

        assert state == Presenting(index=1)
        assert renderer.last("question").number == 2

    def test_three_cycles_complete_the_session(self, driver: QuizDriver):
        answer_all(driver)

        assert isinstance(driver.state, Completed)
        assert driver.get_stats().answered_count == 3

    def test_advance_when_completed_is_noop(self, driver: QuizDriver, renderer):
        answer_all(driver)
        calls_before = len(renderer.calls)

        state = driver.advance()

        assert isinstance(state, Completed)
        assert len(renderer.calls) == calls_before

    def test_confirm_when_completed_is_rejected(self, driver: QuizDriver):
        answer_all(driver)

        with pytest.raises(OptionsLockedError):
            driver.confirm()

    def test_completion_summary(self, driver: QuizDriver, renderer):
        answer_all(driver)

        view = renderer.last("completion")
        assert isinstance(view, CompletionView)
        assert view.stats.correct_count == 2
        assert view.stats.accuracy_percent == 67
        assert view.tier.message == "Pass"
        assert view.set_label == "React Basics"

    def test_completion_view_is_none_until_completed(self, driver: QuizDriver):
        assert driver.completion_view() is None


class TestDispatch:
    """Test event dispatch from a rendering surface."""

    def test_valid_events_transition(self, driver: QuizDriver):
        driver.dispatch(OptionSelected(index=2))
        state = driver.dispatch(AdvanceRequested())

        assert state == Presenting(index=1)

    def test_rejected_event_is_reported(self, driver: QuizDriver, renderer):
        state = driver.dispatch(AdvanceRequested())

        assert state == Presenting(index=0)
        assert renderer.kinds == ["question", "rejection"]
        assert isinstance(renderer.last("rejection"), PrematureAdvanceError)

    def test_empty_confirm_is_reported(self, driver: QuizDriver, renderer):
        driver.dispatch(OptionSelected(index=2))
        driver.dispatch(AdvanceRequested())

        driver.dispatch(ConfirmRequested())

        assert isinstance(renderer.last("rejection"), EmptySelectionError)
        assert len(driver.session.answers) == 1

    def test_unknown_event_type_raises(self, driver: QuizDriver):
        with pytest.raises(TypeError):
            driver.dispatch("advance")

    def test_option_event_requires_an_int(self):
        with pytest.raises(ValidationError):
            OptionSelected(index=True)
        with pytest.raises(ValidationError):
            OptionSelected(index="1")


class TestCurrentView:
    """Test rebuilding views from the state value."""

    def test_presenting_view(self, driver: QuizDriver):
        view = driver.current_view()

        assert isinstance(view, QuestionView)
        assert view.index == 0
        assert view.can_confirm is False

    def test_answered_view(self, driver: QuizDriver):
        driver.select(0)

        view = driver.current_view()

        assert isinstance(view, FeedbackView)
        assert view.is_correct is False

    def test_review_lists_answers(self, driver: QuizDriver):
        answer_all(driver)

        review = driver.review()

        assert [item.number for item in review] == [1, 2, 3]
        assert [item.is_correct for item in review] == [True, True, False]
        assert review[1].selected_labels == ["B", "D"]
        assert review[2].correct_labels == ["A"]


class TestIndependentSessions:
    """Test that drivers do not share state."""

    def test_two_drivers_are_independent(self, sample_questions: list[Question], sample_tiers: list[Tier]):
        first = QuizDriver(sample_questions, tiers=sample_tiers)
        second = QuizDriver(sample_questions, tiers=sample_tiers)

        first.select(2)

        assert isinstance(first.state, Answered)
        assert second.state == Presenting(index=0)
        assert second.session.answers == ()
