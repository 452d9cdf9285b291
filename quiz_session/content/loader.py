"""Loading already-authored question sets from JSON files."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from quiz_session.models.quiz import QuestionSet

logger = logging.getLogger(__name__)


class QuestionSetLoadError(Exception):
    """A question set file could not be read or is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def parse_question_set(data: Any, label: str | None = None) -> QuestionSet:
    """
    Validate raw question-set data.

    Accepts either a bare list of questions or an object with ``label`` and
    ``questions`` keys. Question fields may use the short names
    (``question``, ``answer``, ``explanation.correct``, ``explanation.wrong``).

    Args:
        data: Decoded JSON
        label: Overrides the label found in the data

    Returns:
        Validated QuestionSet

    Raises:
        pydantic.ValidationError: A question breaks the data contract
    """
    if isinstance(data, list):
        data = {"questions": data}
    question_set = QuestionSet.model_validate(data)
    if label is not None:
        question_set = question_set.model_copy(update={"label": label})
    return question_set


def load_question_set(path: str | Path, label: str | None = None) -> QuestionSet:
    """
    Read and validate a question set from a JSON file.

    The label defaults to the one in the file, then to the file stem.

    Raises:
        QuestionSetLoadError: The file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise QuestionSetLoadError(path, f"cannot read file ({e.strerror or e})") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise QuestionSetLoadError(path, f"invalid JSON at line {e.lineno}: {e.msg}") from e

    try:
        question_set = parse_question_set(data, label)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "top level"
        raise QuestionSetLoadError(
            path, f"{e.error_count()} invalid field(s), first at {location}: {first['msg']}"
        ) from e

    if question_set.label is None:
        question_set = question_set.model_copy(update={"label": path.stem})

    logger.info("Loaded %d questions from %s", question_set.question_count, path)
    return question_set
