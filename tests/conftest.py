"""Shared test fixtures and configuration for pytest."""

import json
from pathlib import Path
from typing import Any

import pytest

from quiz_session.engine.driver import QuizDriver
from quiz_session.engine.errors import QuizError
from quiz_session.engine.views import CompletionView, FeedbackView, QuestionView
from quiz_session.models.quiz import (
    Explanation,
    Question,
    QuestionSet,
    QuestionType,
    Tier,
)


class RecordingRenderer:
    """Keeps every render request so tests can inspect them."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def render_question(self, view: QuestionView) -> None:
        self.calls.append(("question", view))

    def render_feedback(self, view: FeedbackView) -> None:
        self.calls.append(("feedback", view))

    def render_completion(self, view: CompletionView) -> None:
        self.calls.append(("completion", view))

    def render_rejection(self, error: QuizError) -> None:
        self.calls.append(("rejection", error))

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]

    def last(self, kind: str) -> Any:
        return next(payload for k, payload in reversed(self.calls) if k == kind)


@pytest.fixture
def single_question() -> Question:
    """A single choice question whose answer is option 2."""
    return Question(
        id=1,
        type=QuestionType.SINGLE,
        prompt_text="Which hook stores local component state?",
        options=("useRef", "useMemo", "useState", "useEffect"),
        tags=("Hooks",),
        correct_indices=frozenset({2}),
        explanation=Explanation(
            correct_text="useState returns the current value and a setter.",
            wrong_text_by_index={0: "useRef does not trigger re-renders.", 3: "useEffect runs side effects."},
        ),
    )


@pytest.fixture
def multiple_question() -> Question:
    """A multiple choice question whose answers are options 1 and 3."""
    return Question(
        id=2,
        type=QuestionType.MULTIPLE,
        prompt_text="Which of these are valid JSX?",
        options=("A", "B", "C", "D"),
        tags=("JSX", "Syntax"),
        correct_indices=frozenset({1, 3}),
        explanation=Explanation(
            correct_text="B and D are both closed tags.",
            wrong_text_by_index={2: "C is never closed."},
        ),
    )


@pytest.fixture
def judge_question() -> Question:
    """A true/false question whose answer is True."""
    return Question(
        id=3,
        type=QuestionType.JUDGE,
        prompt_text="JSX compiles to React.createElement() calls.",
        options=("True", "False"),
        tags=("JSX", "Babel"),
        correct_indices=frozenset({0}),
        explanation=Explanation(
            correct_text="JSX is syntactic sugar for createElement.",
            wrong_text_by_index={1: "JSX is always compiled."},
        ),
    )


@pytest.fixture
def sample_questions(
    single_question: Question, multiple_question: Question, judge_question: Question
) -> list[Question]:
    """One question of each type."""
    return [single_question, multiple_question, judge_question]


@pytest.fixture
def sample_question_set(sample_questions: list[Question]) -> QuestionSet:
    return QuestionSet(label="React Basics", questions=tuple(sample_questions))


@pytest.fixture
def sample_tiers() -> list[Tier]:
    return [
        Tier(min_percent=90, message="Top", icon="🎉"),
        Tier(min_percent=70, message="Good", icon="👍"),
        Tier(min_percent=60, message="Pass", icon="💪"),
        Tier(min_percent=0, message="Review", icon="📚"),
    ]


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def driver(
    sample_question_set: QuestionSet,
    renderer: RecordingRenderer,
    sample_tiers: list[Tier],
) -> QuizDriver:
    """A started driver over the three sample questions."""
    quiz = QuizDriver(sample_question_set, renderer=renderer, tiers=sample_tiers)
    quiz.start()
    return quiz


@pytest.fixture
def raw_question_data() -> list[dict[str, Any]]:
    """Question data with short field names, as found in question files."""
    return [
        {
            "id": 1,
            "type": "single",
            "question": "Which syntax embeds an expression in JSX?",
            "options": ["{{ x }}", "{ x }", "<% x %>", "x"],
            "answer": [1],
            "explanation": {
                "correct": "Single braces embed expressions.",
                "wrong": {"0": "Double braces are an object literal.", "2": "That is EJS."},
            },
            "tags": ["JSX"],
        },
        {
            "id": 2,
            "type": "multiple",
            "question": "Which tags are valid JSX?",
            "options": ["<div />", "<input />", "<Component>", "<p class='x'>"],
            "answer": [0, 1],
            "explanation": {"correct": "Both are closed.", "wrong": {}},
            "tags": ["JSX", "Syntax"],
        },
    ]


@pytest.fixture
def question_file(tmp_path: Path, raw_question_data: list[dict[str, Any]]) -> Path:
    """A question set file with a label."""
    path = tmp_path / "part1.json"
    path.write_text(
        json.dumps({"label": "Part 1", "questions": raw_question_data}),
        encoding="utf-8",
    )
    return path
