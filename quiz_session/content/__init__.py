"""Question set loading."""

from .loader import QuestionSetLoadError, load_question_set, parse_question_set

__all__ = ["load_question_set", "parse_question_set", "QuestionSetLoadError"]
