"""Precondition violations raised by the quiz engine.

All of them are local and recoverable: the session is left unchanged and the
caller (usually the rendering surface) is expected to correct the input.
"""


class QuizError(Exception):
    """Base class for rejected quiz operations."""


class EmptySelectionError(QuizError):
    """Confirm was requested with no option chosen."""

    def __init__(self) -> None:
        super().__init__("Select at least one option before confirming")


class PrematureAdvanceError(QuizError):
    """Advance was requested before the current question was answered."""

    def __init__(self, question_index: int) -> None:
        self.question_index = question_index
        super().__init__(f"Question {question_index + 1} has not been answered yet")


class AnswerAlreadyRecordedError(QuizError):
    """The current question already has an answer."""

    def __init__(self, question_index: int) -> None:
        self.question_index = question_index
        super().__init__(f"Question {question_index + 1} has already been answered")


class SessionCompletedError(QuizError):
    """The session has no current question left."""

    def __init__(self) -> None:
        super().__init__("The quiz is already completed")


class SessionIncompleteError(QuizError):
    """An operation needs a completed session."""

    def __init__(self) -> None:
        super().__init__("The quiz has not been completed yet")


class OptionsLockedError(QuizError):
    """Options were used while the question is not accepting input."""

    def __init__(self) -> None:
        super().__init__("Options are locked for this question")


class InvalidOptionError(QuizError):
    """An option index outside the current question's options."""

    def __init__(self, option_index: int, option_count: int) -> None:
        self.option_index = option_index
        self.option_count = option_count
        super().__init__(
            f"Option {option_index} does not exist (question has {option_count} options)"
        )
