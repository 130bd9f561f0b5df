# validation/steps.py
"""
Step validators for the three-page question authoring form.

Each step looks at the raw request body, stops at the first rule that fails
and reports a single message. Steps are independent: step 2 reads ``type``
from the body itself, so it can run without step 1.
"""
import re
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

from models.question import (
    DIFFICULTIES,
    EMAIL_PATTERN,
    QUESTION_TYPES,
    VISIBILITIES,
    QuestionType,
)

EMAIL_RE = re.compile(EMAIL_PATTERN)


class StepResult(NamedTuple):
    valid: bool
    error: Optional[str] = None


OK = StepResult(True)


def _fail(message: str) -> StepResult:
    return StepResult(False, message)


def _text_length(value: Any) -> int:
    """Length after trimming, 0 for anything that is not a string."""
    if not isinstance(value, str):
        return 0
    return len(value.strip())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_answer(value: Any) -> bool:
    return value not in (None, "", [])


def _has_at_least(value: Any, count: int) -> bool:
    return isinstance(value, list) and len(value) >= count


def validate_step1(body: Mapping[str, Any]) -> StepResult:
    """Identity and classification: title, type, difficulty, category, visibility, author."""
    if _text_length(body.get("title")) < 5:
        return _fail("Question title must be at least 5 characters long")

    question_type = body.get("type")
    if not question_type:
        return _fail("Question type is required")
    if question_type not in QUESTION_TYPES:
        return _fail("Invalid question type")

    if body.get("difficulty") not in DIFFICULTIES:
        return _fail("Invalid difficulty level")

    if _text_length(body.get("category")) == 0:
        return _fail("Category is required")

    if body.get("visibility") not in VISIBILITIES:
        return _fail("Invalid visibility setting")

    if _text_length(body.get("author")) == 0:
        return _fail("Author is required")

    author_email = body.get("authorEmail")
    if not isinstance(author_email, str) or not EMAIL_RE.match(author_email):
        return _fail("Valid author email is required")

    return OK


# Rules checked per question type in step 2, in order. Descriptive has none.
Rule = Tuple[Callable[[Mapping[str, Any]], bool], str]

_CHOICE_RULES: List[Rule] = [
    (lambda b: _has_at_least(b.get("options"), 2),
     "At least 2 options are required for MCQ questions"),
    (lambda b: _has_answer(b.get("correctAnswer")),
     "Correct answer is required for MCQ questions"),
]

TYPE_RULES: Dict[str, List[Rule]] = {
    QuestionType.SINGLE_CHOICE_MCQ.value: _CHOICE_RULES,
    QuestionType.MULTIPLE_CHOICE.value: _CHOICE_RULES,
    QuestionType.MATCH_FOLLOWING.value: [
        (lambda b: _has_at_least(b.get("matchPairs"), 2),
         "At least 2 match pairs are required for Match Following questions"),
    ],
    QuestionType.TRUE_FALSE.value: [
        (lambda b: _has_answer(b.get("correctAnswer")),
         "Correct answer is required for True/False questions"),
    ],
    QuestionType.DESCRIPTIVE.value: [],
}


def validate_step2(body: Mapping[str, Any]) -> StepResult:
    """Content plus the answer structure its question type needs."""
    if _text_length(body.get("content")) < 10:
        return _fail("Question content must be at least 10 characters long")

    question_type = body.get("type")
    rules = TYPE_RULES.get(question_type, []) if isinstance(question_type, str) else []
    for check, message in rules:
        if not check(body):
            return _fail(message)

    return OK


def validate_step3(body: Mapping[str, Any]) -> StepResult:
    """Scoring and timing. Zero is a valid value for every numeric field."""
    points = body.get("points")
    if not _is_number(points) or points < 0:
        return _fail("Points are required and must be non-negative")

    estimated_time = body.get("estimatedTime")
    if not _is_number(estimated_time) or estimated_time < 0:
        return _fail("Estimated time is required and must be non-negative")

    negative_marks = body.get("negativeMarks")
    if negative_marks is not None and (not _is_number(negative_marks) or negative_marks < 0):
        return _fail("Negative marks must be non-negative")

    return OK


STEPS = {
    1: validate_step1,
    2: validate_step2,
    3: validate_step3,
}


def validate_complete_question(body: Mapping[str, Any]) -> StepResult:
    for step in sorted(STEPS):
        result = STEPS[step](body)
        if not result.valid:
            return result
    return OK
