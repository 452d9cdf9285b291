"""In-memory store for one quiz attempt."""

import logging
import math
from collections.abc import Iterable, Sequence

from quiz_session.engine.errors import (
    AnswerAlreadyRecordedError,
    EmptySelectionError,
    InvalidOptionError,
    PrematureAdvanceError,
    SessionCompletedError,
)
from quiz_session.engine.evaluator import evaluate
from quiz_session.models.quiz import AnswerRecord, Question, SessionStats

logger = logging.getLogger(__name__)


def accuracy_percent(correct_count: int, answered_count: int) -> int:
    """Percentage of correct answers, rounded half up; 0 when nothing is answered."""
    if answered_count <= 0:
        return 0
    return math.floor(correct_count * 100 / answered_count + 0.5)


class QuizSession:
    """
    Owns the question list, the cursor and the answer records of one attempt.

    The cursor ranges over ``[0, len(questions)]``; ``len(questions)`` is the
    completed position. Answers are append-only and there is at most one per
    question.
    """

    def __init__(self, questions: Sequence[Question]) -> None:
        self._questions: tuple[Question, ...] = tuple(questions)
        self._cursor = 0
        self._answers: list[AnswerRecord] = []
        self._correct_count = 0

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def answers(self) -> tuple[AnswerRecord, ...]:
        return tuple(self._answers)

    @property
    def correct_count(self) -> int:
        return self._correct_count

    @property
    def is_completed(self) -> bool:
        return self._cursor >= len(self._questions)

    @property
    def current_answer(self) -> AnswerRecord | None:
        """The record for the question at the cursor, if it has been answered."""
        if self._answers and self._answers[-1].question_index == self._cursor:
            return self._answers[-1]
        return None

    def get_current_question(self) -> Question | None:
        """Return the question at the cursor, or None once completed."""
        if self.is_completed:
            return None
        return self._questions[self._cursor]

    def record_answer(self, selected_indices: Iterable[int]) -> AnswerRecord:
        """
        Evaluate and store the answer to the current question.

        Args:
            selected_indices: Option indices chosen by the user

        Returns:
            The stored AnswerRecord

        Raises:
            SessionCompletedError: No question is left to answer
            AnswerAlreadyRecordedError: The current question is already answered
            EmptySelectionError: Nothing was selected
            InvalidOptionError: A selected index is not one of the options
        """
        question = self.get_current_question()
        if question is None:
            raise SessionCompletedError()
        if self.current_answer is not None:
            raise AnswerAlreadyRecordedError(self._cursor)

        selected = frozenset(selected_indices)
        if not selected:
            raise EmptySelectionError()
        for index in sorted(selected):
            if isinstance(index, bool) or not 0 <= index < len(question.options):
                raise InvalidOptionError(index, len(question.options))

        record = AnswerRecord(
            question_index=self._cursor,
            selected_indices=selected,
            is_correct=evaluate(question, selected),
        )
        self._answers.append(record)
        if record.is_correct:
            self._correct_count += 1

        logger.debug(
            "Recorded answer %s for question %d (correct=%s)",
            sorted(selected),
            self._cursor,
            record.is_correct,
        )
        return record

    def advance(self) -> int:
        """
        Move the cursor to the next question, saturating at the completed position.

        Returns:
            The new cursor

        Raises:
            PrematureAdvanceError: The current question has not been answered
        """
        if self.is_completed:
            return self._cursor
        if self.current_answer is None:
            raise PrematureAdvanceError(self._cursor)
        self._cursor += 1
        return self._cursor

    def get_stats(self) -> SessionStats:
        """Counters for the stats bar and the completion summary."""
        answered = len(self._answers)
        return SessionStats(
            answered_count=answered,
            total_count=len(self._questions),
            correct_count=self._correct_count,
            accuracy_percent=accuracy_percent(self._correct_count, answered),
        )
