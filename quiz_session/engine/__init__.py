"""Quiz session engine: store, evaluator and presentation driver."""

from .driver import QuizDriver, Renderer
from .errors import (
    AnswerAlreadyRecordedError,
    EmptySelectionError,
    InvalidOptionError,
    OptionsLockedError,
    PrematureAdvanceError,
    QuizError,
    SessionCompletedError,
    SessionIncompleteError,
)
from .evaluator import evaluate
from .session import QuizSession
from .states import (
    AdvanceRequested,
    Answered,
    Completed,
    ConfirmRequested,
    OptionSelected,
    Presenting,
)

__all__ = [
    "QuizDriver",
    "Renderer",
    "QuizSession",
    "evaluate",
    "Presenting",
    "Answered",
    "Completed",
    "OptionSelected",
    "ConfirmRequested",
    "AdvanceRequested",
    "QuizError",
    "EmptySelectionError",
    "PrematureAdvanceError",
    "AnswerAlreadyRecordedError",
    "SessionCompletedError",
    "SessionIncompleteError",
    "OptionsLockedError",
    "InvalidOptionError",
]
