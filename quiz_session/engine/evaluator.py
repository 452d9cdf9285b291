"""Answer evaluation."""

from collections.abc import Iterable

from quiz_session.models.quiz import Question, QuestionType


def evaluate(question: Question, selected_indices: Iterable[int]) -> bool:
    """
    Decide whether a selection answers a question correctly.

    Multiple choice answers are compared as sets, so selection order does not
    matter. Single choice and judge answers must be exactly the one accepted
    option. An empty selection is never correct.

    Args:
        question: The question being answered
        selected_indices: Option indices chosen by the user

    Returns:
        True if the selection is correct
    """
    selected = sorted(set(selected_indices))
    if not selected:
        return False

    match question.type:
        case QuestionType.MULTIPLE:
            return selected == sorted(question.correct_indices)
        case QuestionType.SINGLE | QuestionType.JUDGE:
            return len(selected) == 1 and selected[0] == question.correct_index
