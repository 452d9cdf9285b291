"""Data models for quiz sessions."""

from .quiz import (
    AnswerRecord,
    Explanation,
    Question,
    QuestionSet,
    QuestionType,
    SessionStats,
    Tier,
)

__all__ = [
    "Question",
    "QuestionType",
    "Explanation",
    "QuestionSet",
    "AnswerRecord",
    "SessionStats",
    "Tier",
]
