"""State values and input events of the presentation state machine."""

from typing import Literal, Union

from pydantic import BaseModel, Field

from quiz_session.models.quiz import AnswerRecord, SessionStats


class Presenting(BaseModel):
    """Question ``index`` is visible and accepts option input."""

    kind: Literal["presenting"] = "presenting"
    index: int = Field(..., ge=0)
    pending: frozenset[int] = frozenset()

    model_config = {"frozen": True}


class Answered(BaseModel):
    """Feedback for question ``index`` is visible; options are locked."""

    kind: Literal["answered"] = "answered"
    index: int = Field(..., ge=0)
    record: AnswerRecord

    model_config = {"frozen": True}


class Completed(BaseModel):
    """The session summary is visible. Terminal."""

    kind: Literal["completed"] = "completed"
    stats: SessionStats

    model_config = {"frozen": True}


QuizState = Union[Presenting, Answered, Completed]


class OptionSelected(BaseModel):
    """The user clicked an option."""

    index: int = Field(..., strict=True)

    model_config = {"frozen": True}


class ConfirmRequested(BaseModel):
    """The user asked to submit a multiple choice selection."""

    model_config = {"frozen": True}


class AdvanceRequested(BaseModel):
    """The user asked for the next question (or the results)."""

    model_config = {"frozen": True}


QuizEvent = Union[OptionSelected, ConfirmRequested, AdvanceRequested]
