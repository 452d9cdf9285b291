"""Structured render payloads handed to the rendering surface.

Text fields are copied from the question set as-is; escaping them for display
is the rendering surface's job.
"""

from collections.abc import Iterable, Sequence
from enum import Enum

from pydantic import BaseModel, Field

from quiz_session.models.quiz import (
    AnswerRecord,
    Question,
    QuestionType,
    SessionStats,
    Tier,
)


def option_label(index: int) -> str:
    """Letter shown next to an option: 0 -> A, 1 -> B, ..."""
    return chr(ord("A") + index)


def parse_option_label(label: str) -> int:
    """Inverse of option_label. Raises ValueError for anything but one letter."""
    label = label.strip().upper()
    if len(label) != 1 or not "A" <= label <= "Z":
        raise ValueError(f"Not an option letter: {label!r}")
    return ord(label) - ord("A")


class OptionMark(str, Enum):
    """How an option is marked once the question has been answered."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    NEUTRAL = "neutral"


class OptionView(BaseModel):
    index: int
    label: str
    text: str
    selected: bool = False
    mark: OptionMark | None = None


class QuestionView(BaseModel):
    """Everything needed to draw a question card."""

    index: int = Field(..., ge=0)
    number: int = Field(..., ge=1, description="1-based position for display")
    total: int = Field(..., ge=1)
    type: QuestionType
    type_label: str
    prompt_text: str
    tags: list[str] = Field(default_factory=list)
    options: list[OptionView]
    can_confirm: bool = False
    is_last: bool = False
    stats: SessionStats
    set_label: str | None = None


class ExplanationEntry(BaseModel):
    """Rationale for one wrong option."""

    index: int
    label: str
    text: str
    was_selected: bool


class FeedbackView(BaseModel):
    """A question card after answering: marks, verdict and explanations."""

    question: QuestionView
    is_correct: bool
    correct_labels: list[str]
    correct_text: str
    wrong_explanations: list[ExplanationEntry] = Field(default_factory=list)


class CompletionView(BaseModel):
    """Final summary of a session."""

    stats: SessionStats
    tier: Tier | None = None
    set_label: str | None = None


class ReviewItem(BaseModel):
    """One answered question, as listed in a session report."""

    number: int
    prompt_text: str
    selected_labels: list[str]
    correct_labels: list[str]
    is_correct: bool
    correct_text: str


def select_tier(accuracy_percent: int, tiers: Iterable[Tier]) -> Tier | None:
    """Pick the tier with the highest threshold the accuracy reaches."""
    for tier in sorted(tiers, key=lambda t: t.min_percent, reverse=True):
        if accuracy_percent >= tier.min_percent:
            return tier
    return None


def _labels(indices: Iterable[int]) -> list[str]:
    return [option_label(i) for i in sorted(indices)]


def build_question_view(
    question: Question,
    index: int,
    total: int,
    stats: SessionStats,
    pending: Iterable[int] = (),
    set_label: str | None = None,
) -> QuestionView:
    """Build the view of an unanswered question."""
    pending = frozenset(pending)
    return QuestionView(
        index=index,
        number=index + 1,
        total=total,
        type=question.type,
        type_label=question.type.label,
        prompt_text=question.prompt_text,
        tags=list(question.tags),
        options=[
            OptionView(index=i, label=option_label(i), text=text, selected=i in pending)
            for i, text in enumerate(question.options)
        ],
        can_confirm=bool(pending),
        is_last=index == total - 1,
        stats=stats,
        set_label=set_label,
    )


def build_feedback_view(
    question: Question,
    record: AnswerRecord,
    total: int,
    stats: SessionStats,
    set_label: str | None = None,
) -> FeedbackView:
    """
    Build the feedback for an answered question.

    Every accepted option is marked correct; selected options that are not
    accepted are marked incorrect; the rest stay neutral.
    """
    selected = record.selected_indices
    view = build_question_view(
        question, record.question_index, total, stats, selected, set_label
    )
    for option in view.options:
        if option.index in question.correct_indices:
            option.mark = OptionMark.CORRECT
        elif option.selected:
            option.mark = OptionMark.INCORRECT
        else:
            option.mark = OptionMark.NEUTRAL
    view.can_confirm = False

    wrong = question.explanation.wrong_text_by_index
    return FeedbackView(
        question=view,
        is_correct=record.is_correct,
        correct_labels=_labels(question.correct_indices),
        correct_text=question.explanation.correct_text,
        wrong_explanations=[
            ExplanationEntry(
                index=i,
                label=option_label(i),
                text=wrong[i],
                was_selected=i in selected,
            )
            for i in sorted(wrong)
        ],
    )


def build_completion_view(
    stats: SessionStats, tiers: Iterable[Tier], set_label: str | None = None
) -> CompletionView:
    return CompletionView(
        stats=stats,
        tier=select_tier(stats.accuracy_percent, tiers),
        set_label=set_label,
    )


def build_review(
    questions: Sequence[Question], answers: Iterable[AnswerRecord]
) -> list[ReviewItem]:
    """List answered questions with the user's choice next to the accepted one."""
    items = []
    for record in answers:
        question = questions[record.question_index]
        items.append(
            ReviewItem(
                number=record.question_index + 1,
                prompt_text=question.prompt_text,
                selected_labels=_labels(record.selected_indices),
                correct_labels=_labels(question.correct_indices),
                is_correct=record.is_correct,
                correct_text=question.explanation.correct_text,
            )
        )
    return items
