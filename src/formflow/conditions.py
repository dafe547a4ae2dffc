"""
Condition System for formflow

A condition compares the answer given to one question against a
configured value using one of four operators.

Conditions are flat. There is no AND/OR nesting: a question's rules
are read top to bottom and the first true condition wins.

ARCHITECTURAL RULE:
    Evaluation never raises.
    A missing answer, an unknown operator or a malformed value
    evaluates to False.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    """
    Comparison operators available to branch conditions.

    Values are the strings used in stored form documents.
    """

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    IN = "in"

    @property
    def label(self) -> str:
        """Human-readable label shown in the rule editor."""
        return OPERATOR_LABELS[self]


OPERATOR_LABELS = {
    Operator.EQUALS: "equals",
    Operator.NOT_EQUALS: "does not equal",
    Operator.CONTAINS: "contains",
    Operator.IN: "is one of",
}


ConditionValue = Union[str, Sequence[str]]


@dataclass(frozen=True)
class Condition:
    """
    Predicate over a single answer.

    Example:
        "Favourite colour equals Red"

    Becomes:
        Condition(
            question_id="q_colour",
            operator=Operator.EQUALS,
            value="Red",
        )

    Properties:
        question_id: Id of the question whose answer is tested
        operator: Operator enum member. Unknown operator strings read
            from a document are kept as plain strings and evaluate False.
        value: A single string, or a list of strings for ``in``

    IMPORTANT:
        This object does NOT check that question_id exists.
        A condition on an unknown question is simply never true.
    """

    question_id: str
    operator: Union[Operator, str] = Operator.EQUALS
    value: ConditionValue = ""


def coerce_operator(raw: Union[Operator, str]) -> Union[Operator, str]:
    """Map a raw operator string onto Operator, keeping unknown strings as-is."""
    if isinstance(raw, Operator):
        return raw
    try:
        return Operator(raw)
    except ValueError:
        return raw


# =========================================================================
# CANONICALISATION
# =========================================================================

def canonical_scalar(value: Any) -> str:
    """
    Convert a scalar answer to the text used for comparisons.

    Rules:
        - str       -> unchanged
        - bool      -> "true" / "false"
        - int       -> decimal text ("3")
        - float     -> integer text when integral ("3.0" -> "3"),
                       otherwise Python's shortest repr ("2.5")
        - None      -> ""
        - anything else -> str(value)
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if value is None:
        return ""
    return str(value)


def canonical_answer(answer: Any) -> Union[str, Tuple[str, ...], None]:
    """
    Canonicalise an answer by shape.

    Returns:
        None for a missing answer, a tuple of strings for a list answer
        (checkboxes), otherwise a single string.
    """
    if answer is None:
        return None
    if isinstance(answer, (list, tuple)):
        return tuple(canonical_scalar(item) for item in answer)
    return canonical_scalar(answer)


def _is_value_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _membership(answer: Union[str, Tuple[str, ...]], value: ConditionValue) -> bool:
    # equals / not_equals share this test; list answers check membership
    target = canonical_scalar(value) if not _is_value_list(value) else None
    if isinstance(answer, tuple):
        return target is not None and target in answer
    return target is not None and answer == target


# =========================================================================
# EVALUATION
# =========================================================================

def evaluate_condition(condition: Condition, answers: Optional[Mapping[str, Any]]) -> bool:
    """
    Evaluate a condition against the answers collected so far.

    Args:
        condition: Condition to test
        answers: Answers keyed by question id

    Returns:
        True when the referenced answer satisfies the condition.
        False for a missing answer or an unknown operator.
    """
    answer = canonical_answer((answers or {}).get(condition.question_id))
    if answer is None:
        return False

    operator = coerce_operator(condition.operator)
    value = condition.value

    if operator is Operator.EQUALS:
        return _membership(answer, value)

    if operator is Operator.NOT_EQUALS:
        return not _membership(answer, value)

    if operator is Operator.CONTAINS:
        if _is_value_list(value):
            return False
        needle = canonical_scalar(value).lower()
        if isinstance(answer, tuple):
            return any(needle in item.lower() for item in answer)
        return needle in answer.lower()

    if operator is Operator.IN:
        if not _is_value_list(value):
            return False
        allowed = {canonical_scalar(v) for v in value}
        if isinstance(answer, tuple):
            return any(item in allowed for item in answer)
        return answer in allowed

    logger.debug("Unknown operator %r on condition for %s", operator, condition.question_id)
    return False
