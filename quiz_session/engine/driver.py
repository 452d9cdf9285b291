"""Presentation driver: the state machine between a session and a rendering surface."""

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from quiz_session.config.settings import get_settings
from quiz_session.engine.errors import (
    EmptySelectionError,
    InvalidOptionError,
    OptionsLockedError,
    PrematureAdvanceError,
    QuizError,
)
from quiz_session.engine.session import QuizSession
from quiz_session.engine.states import (
    AdvanceRequested,
    Answered,
    Completed,
    ConfirmRequested,
    OptionSelected,
    Presenting,
    QuizEvent,
    QuizState,
)
from quiz_session.engine.views import (
    CompletionView,
    FeedbackView,
    QuestionView,
    ReviewItem,
    build_completion_view,
    build_feedback_view,
    build_question_view,
    build_review,
)
from quiz_session.models.quiz import (
    Question,
    QuestionSet,
    QuestionType,
    SessionStats,
    Tier,
)

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """The surface that draws views and reports rejected input."""

    def render_question(self, view: QuestionView) -> None: ...

    def render_feedback(self, view: FeedbackView) -> None: ...

    def render_completion(self, view: CompletionView) -> None: ...

    def render_rejection(self, error: QuizError) -> None: ...


class QuizDriver:
    """
    Drives one quiz attempt.

    States move ``Presenting(i) -> Answered(i) -> Presenting(i + 1)`` and
    finally to ``Completed``. Every accepted transition replaces the state value
    and asks the renderer to redraw from it. Direct calls raise QuizError on
    invalid input; ``dispatch`` reports the error to the renderer instead.

    Args:
        questions: A QuestionSet or a plain sequence of questions
        label: Display name of the quiz set; defaults to the set's label
        renderer: Rendering surface, optional
        tiers: Completion messages; defaults to the configured tiers
    """

    def __init__(
        self,
        questions: QuestionSet | Sequence[Question],
        label: str | None = None,
        renderer: Renderer | None = None,
        tiers: Iterable[Tier] | None = None,
    ) -> None:
        if isinstance(questions, QuestionSet):
            label = label if label is not None else questions.label
            questions = questions.questions
        self.label = label
        self.session = QuizSession(questions)
        self._renderer = renderer
        self._tiers = list(tiers) if tiers is not None else list(get_settings().tiers)

        if self.session.is_completed:
            self._state: QuizState = Completed(stats=self.session.get_stats())
        else:
            self._state = Presenting(index=0)

    @property
    def state(self) -> QuizState:
        return self._state

    def start(self) -> QuizState:
        """Render the initial state."""
        self._render()
        return self._state

    def select(self, option_index: int) -> QuizState:
        """
        Handle a click on an option.

        Multiple choice toggles the option in the pending selection. Single
        choice and judge questions replace the selection and confirm at once.
        """
        state = self._state
        if not isinstance(state, Presenting):
            raise OptionsLockedError()

        question = self.session.questions[state.index]
        if isinstance(option_index, bool) or not 0 <= option_index < len(question.options):
            raise InvalidOptionError(option_index, len(question.options))

        if question.type is QuestionType.MULTIPLE:
            self._state = Presenting(
                index=state.index, pending=state.pending ^ {option_index}
            )
            logger.debug("Pending selection now %s", sorted(self._state.pending))
            self._render()
            return self._state

        self._state = Presenting(index=state.index, pending=frozenset({option_index}))
        return self.confirm()

    def confirm(self) -> QuizState:
        """Submit the pending selection and show feedback."""
        state = self._state
        if not isinstance(state, Presenting):
            raise OptionsLockedError()
        if not state.pending:
            raise EmptySelectionError()

        record = self.session.record_answer(state.pending)
        self._state = Answered(index=state.index, record=record)
        self._render()
        return self._state

    def advance(self) -> QuizState:
        """Go to the next question, or to the summary after the last one."""
        state = self._state
        match state:
            case Completed():
                return state
            case Presenting():
                raise PrematureAdvanceError(state.index)
            case Answered():
                self.session.advance()
                if self.session.is_completed:
                    self._state = Completed(stats=self.session.get_stats())
                    logger.info(
                        "Quiz %s completed: %d/%d correct",
                        self.label or "(unnamed)",
                        self.session.correct_count,
                        len(self.session.questions),
                    )
                else:
                    self._state = Presenting(index=self.session.cursor)
                self._render()
                return self._state

    def dispatch(self, event: QuizEvent) -> QuizState:
        """
        Apply an input event from the rendering surface.

        Invalid events leave the state unchanged and are reported back through
        ``Renderer.render_rejection``.
        """
        try:
            match event:
                case OptionSelected(index=index):
                    return self.select(index)
                case ConfirmRequested():
                    return self.confirm()
                case AdvanceRequested():
                    return self.advance()
                case _:
                    raise TypeError(f"Unknown quiz event: {event!r}")
        except QuizError as e:
            logger.warning("Rejected %s in state %s: %s", type(event).__name__, self._state.kind, e)
            if self._renderer is not None:
                self._renderer.render_rejection(e)
            return self._state

    def get_stats(self) -> SessionStats:
        return self.session.get_stats()

    def current_view(self) -> QuestionView | FeedbackView | CompletionView:
        """Build the view for the current state."""
        state = self._state
        stats = self.session.get_stats()
        total = len(self.session.questions)
        match state:
            case Presenting():
                return build_question_view(
                    self.session.questions[state.index],
                    state.index,
                    total,
                    stats,
                    state.pending,
                    self.label,
                )
            case Answered():
                return build_feedback_view(
                    self.session.questions[state.index],
                    state.record,
                    total,
                    stats,
                    self.label,
                )
            case Completed():
                return build_completion_view(stats, self._tiers, self.label)

    def completion_view(self) -> CompletionView | None:
        """The summary, once the session is completed."""
        if not isinstance(self._state, Completed):
            return None
        return build_completion_view(self.session.get_stats(), self._tiers, self.label)

    def review(self) -> list[ReviewItem]:
        return build_review(self.session.questions, self.session.answers)

    def _render(self) -> None:
        if self._renderer is None:
            return
        view = self.current_view()
        if isinstance(view, QuestionView):
            self._renderer.render_question(view)
        elif isinstance(view, FeedbackView):
            self._renderer.render_feedback(view)
        else:
            self._renderer.render_completion(view)
