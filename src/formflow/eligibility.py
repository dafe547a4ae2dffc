"""
Eligibility and value queries used by the rule editor.

Given a question's position in the form:
    - which earlier questions may feed a condition
    - which later questions may be jumped to
    - which discrete values a question can produce
"""

from typing import List, Sequence, Tuple, Union

from formflow.model import (
    BOOLEAN_TYPES,
    CHOICE_TYPES,
    SCALE_TYPES,
    Question,
    QuestionIndex,
    QuestionType,
)

# Kinds whose answer space is small and enumerable
CONDITIONABLE_TYPES = CHOICE_TYPES | BOOLEAN_TYPES | SCALE_TYPES

BOOLEAN_VALUES = ("Yes", "No")
RATING_DEFAULT_RANGE: Tuple[int, int] = (1, 5)
OPINION_SCALE_DEFAULT_RANGE: Tuple[int, int] = (1, 10)

Questions = Union[QuestionIndex, Sequence[Question]]


def conditionable_questions(question: Question, questions: Questions) -> List[Question]:
    """Earlier questions with an enumerable answer space; empty if first or absent."""
    index = QuestionIndex.of(questions)
    return [q for q in index.before(question.id) if q.type in CONDITIONABLE_TYPES]


def branchable_questions(question: Question, questions: Questions) -> List[Question]:
    """Every question after ``question``; empty if absent."""
    return QuestionIndex.of(questions).after(question.id)


def can_branch(question: Question, questions: Questions) -> bool:
    """A rule needs both a source before and a target after the question."""
    index = QuestionIndex.of(questions)
    return bool(conditionable_questions(question, index)) and bool(
        branchable_questions(question, index)
    )


def _bound(value, default: int) -> int:
    # 0, None and unparseable bounds all fall back to the default
    try:
        return int(value) or default
    except (TypeError, ValueError):
        return default


def _int_range(low: int, high: int) -> List[str]:
    return [str(v) for v in range(low, high + 1)]


def question_values(question: Question) -> List[str]:
    """
    Discrete answers a question can produce, as condition values.

    Returns:
        dropdown / checkboxes -> the configured options
        yes_no                -> ["Yes", "No"]
        rating                -> min..max inclusive, default 1..5
        opinion_scale         -> min..max inclusive, default 1..10
        anything else         -> []

    A bound of 0 or None falls back to the default bound.
    """
    if question.type in CHOICE_TYPES:
        return list(question.options or [])

    if question.type in BOOLEAN_TYPES:
        return list(BOOLEAN_VALUES)

    if question.type == QuestionType.RATING:
        low, high = RATING_DEFAULT_RANGE
        return _int_range(_bound(question.min_value, low), _bound(question.max_value, high))

    if question.type == QuestionType.OPINION_SCALE:
        low, high = OPINION_SCALE_DEFAULT_RANGE
        return _int_range(_bound(question.min_value, low), _bound(question.max_value, high))

    return []
