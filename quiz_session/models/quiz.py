"""Pydantic models for quiz content and session records."""

from collections import Counter
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


class QuestionType(str, Enum):
    """Closed set of question types."""

    SINGLE = "single"
    MULTIPLE = "multiple"
    JUDGE = "judge"

    @property
    def label(self) -> str:
        """Human readable name of the question type."""
        return _TYPE_LABELS[self]


# Options are labelled with the letters A to Z
MAX_OPTIONS = 26


_TYPE_LABELS = {
    QuestionType.SINGLE: "Single choice",
    QuestionType.MULTIPLE: "Multiple choice",
    QuestionType.JUDGE: "True / False",
}


class Explanation(BaseModel):
    """Rationale shown once a question has been answered."""

    correct_text: str = Field(
        ...,
        validation_alias=AliasChoices("correct_text", "correct"),
        description="Why the accepted answer is right",
    )
    wrong_text_by_index: dict[int, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("wrong_text_by_index", "wrong"),
        description="Why a given option is wrong, keyed by option index",
    )

    model_config = {"frozen": True, "populate_by_name": True}


class Question(BaseModel):
    """A single quiz item. Option identity is its position in ``options``."""

    id: int | None = Field(None, description="Question number from the source set")
    type: QuestionType = Field(..., description="Question type")
    prompt_text: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("prompt_text", "question"),
        description="The question statement",
    )
    options: tuple[str, ...] = Field(..., description="Ordered option texts")
    tags: tuple[str, ...] = Field(default=(), description="Category labels")
    correct_indices: frozenset[int] = Field(
        ...,
        validation_alias=AliasChoices("correct_indices", "answer"),
        description="Indices into options of the accepted answer(s)",
    )
    explanation: Explanation = Field(..., description="Answer rationale")

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure there is something to choose between."""
        if len(v) < 2:
            raise ValueError("A question needs at least two options")
        if len(v) > MAX_OPTIONS:
            raise ValueError(f"A question can have at most {MAX_OPTIONS} options (A to Z)")
        return v

    @model_validator(mode="after")
    def validate_answer_indices(self) -> "Question":
        """Reject answers that could never be evaluated correctly."""
        option_count = len(self.options)
        out_of_range = sorted(i for i in self.correct_indices if not 0 <= i < option_count)
        if out_of_range:
            raise ValueError(
                f"correct_indices {out_of_range} outside options range [0, {option_count})"
            )

        if self.type is QuestionType.MULTIPLE:
            if not self.correct_indices:
                raise ValueError("A multiple choice question needs at least one answer")
        elif len(self.correct_indices) != 1:
            raise ValueError(
                f"A {self.type.value} question needs exactly one answer, "
                f"got {len(self.correct_indices)}"
            )

        if self.type is QuestionType.JUDGE and option_count != 2:
            raise ValueError("A judge question must have exactly two options")

        for index in self.explanation.wrong_text_by_index:
            if not 0 <= index < option_count:
                raise ValueError(f"Explanation references unknown option {index}")
        return self

    @property
    def correct_index(self) -> int:
        """The accepted answer of a single/judge question."""
        return min(self.correct_indices)

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": 3,
                "type": "judge",
                "question": "JSX is compiled to React.createElement() calls.",
                "options": ["True", "False"],
                "answer": [0],
                "explanation": {
                    "correct": "JSX is syntactic sugar for createElement calls.",
                    "wrong": {"1": "JSX is always compiled before it runs."},
                },
                "tags": ["JSX", "Babel"],
            }
        },
    }


class QuestionSet(BaseModel):
    """An ordered list of questions, optionally named."""

    label: str | None = Field(None, description="Display name of the quiz set")
    questions: tuple[Question, ...] = Field(default=(), description="Questions in order")

    @property
    def question_count(self) -> int:
        """Get the number of questions in this set."""
        return len(self.questions)

    def count_by_type(self) -> dict[QuestionType, int]:
        """Count questions per type, in QuestionType order."""
        counts = Counter(q.type for q in self.questions)
        return {qtype: counts[qtype] for qtype in QuestionType if counts[qtype]}

    def all_tags(self) -> list[str]:
        """Distinct tags in first-seen order."""
        return list(dict.fromkeys(tag for q in self.questions for tag in q.tags))

    model_config = {"frozen": True}


class AnswerRecord(BaseModel):
    """One confirmed answer and its correctness."""

    question_index: int = Field(..., ge=0)
    selected_indices: frozenset[int]
    is_correct: bool

    model_config = {"frozen": True}


class SessionStats(BaseModel):
    """Running counters of a session."""

    answered_count: int = Field(0, ge=0)
    total_count: int = Field(0, ge=0)
    correct_count: int = Field(0, ge=0)
    accuracy_percent: int = Field(0, ge=0, le=100)

    model_config = {"frozen": True}


class Tier(BaseModel):
    """A graded completion message, chosen when accuracy >= min_percent."""

    min_percent: int = Field(..., ge=0, le=100)
    message: str = Field(..., min_length=1)
    icon: str = ""

    model_config = {"frozen": True}
