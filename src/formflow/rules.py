"""
Authoring helpers for branch rules.

Every helper returns a new Question and leaves its input untouched, so
an editor can keep the previous version for undo.

Rule ids come from an injected ``id_factory`` callable. The default is a
random uuid4 hex; pass a SequentialIds instance for reproducible ids.
"""

import itertools
import uuid
from dataclasses import replace
from typing import Callable, Optional, Sequence, Union

from formflow.conditions import Condition, ConditionValue, Operator, coerce_operator
from formflow.eligibility import branchable_questions, conditionable_questions, question_values
from formflow.model import END, BranchRule, DefaultNext, Question, QuestionIndex, Target

IdFactory = Callable[[], str]


def random_rule_id() -> str:
    return uuid.uuid4().hex


class SequentialIds:
    """
    Deterministic id factory: rule-1, rule-2, ...

    Example:
        ids = SequentialIds("r")
        ids()  # "r-1"
        ids()  # "r-2"
    """

    def __init__(self, prefix: str = "rule", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


def create_branch_rule(
    question_id: str,
    operator: Union[Operator, str] = Operator.EQUALS,
    value: ConditionValue = "",
    target: Target = END,
    id_factory: Optional[IdFactory] = None,
) -> BranchRule:
    """Build a new rule testing the answer to ``question_id``."""
    make_id = id_factory or random_rule_id
    condition = Condition(question_id=question_id, operator=coerce_operator(operator), value=value)
    return BranchRule(id=make_id(), condition=condition, target=target)


def _first_value(question: Optional[Question]) -> str:
    if question is None:
        return ""
    values = question_values(question)
    return values[0] if values else ""


def add_branch(
    question: Question,
    questions: Union[QuestionIndex, Sequence[Question]],
    id_factory: Optional[IdFactory] = None,
) -> Question:
    """
    Append a starter rule to ``question``.

    The rule tests the first conditionable question for equality with its
    first possible value and jumps to the first later question (or END).
    Without any conditionable question the input is returned unchanged.
    """
    index = QuestionIndex.of(questions)
    sources = conditionable_questions(question, index)
    if not sources:
        return question

    targets = branchable_questions(question, index)
    rule = create_branch_rule(
        sources[0].id,
        Operator.EQUALS,
        _first_value(sources[0]),
        targets[0].id if targets else END,
        id_factory=id_factory,
    )
    return replace(question, branches=[*question.branches, rule])


def update_branch(
    question: Question,
    index: int,
    questions: Union[QuestionIndex, Sequence[Question]],
    *,
    question_id: Optional[str] = None,
    operator: Optional[Union[Operator, str]] = None,
    value: Optional[ConditionValue] = None,
    target: Optional[Target] = None,
) -> Question:
    """
    Change fields of the rule at ``index``.

    Switching the condition to a different source question resets the
    value to that question's first possible value, unless ``value`` is
    given explicitly.

    Raises:
        IndexError: If ``index`` does not address an existing rule
    """
    if not 0 <= index < len(question.branches):
        raise IndexError(f"No branch rule at index {index} on question {question.id}")

    rule = question.branches[index]
    condition = rule.condition
    source_changed = question_id is not None and question_id != condition.question_id

    if value is None and source_changed:
        value = _first_value(QuestionIndex.of(questions).get(question_id))

    condition = replace(
        condition,
        question_id=question_id if question_id is not None else condition.question_id,
        operator=coerce_operator(operator) if operator is not None else condition.operator,
        value=value if value is not None else condition.value,
    )
    updated = replace(rule, condition=condition, target=target if target is not None else rule.target)

    branches = list(question.branches)
    branches[index] = updated
    return replace(question, branches=branches)


def delete_branch(question: Question, index: int) -> Question:
    """
    Remove the rule at ``index``.

    Raises:
        IndexError: If ``index`` does not address an existing rule
    """
    if not 0 <= index < len(question.branches):
        raise IndexError(f"No branch rule at index {index} on question {question.id}")
    return replace(question, branches=[r for i, r in enumerate(question.branches) if i != index])


def set_default_next(question: Question, target: Optional[Target]) -> Question:
    """None clears the fallback, END ends the form, an id jumps to it."""
    return replace(question, default_next=DefaultNext.from_target(target))
