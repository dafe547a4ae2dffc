"""
Next-question resolution and path projection.

resolve_next picks where a respondent goes after answering a question.
project_path repeats that step from the start of the form to predict the
whole route, which progress indicators divide by.

Both functions run on every keystroke in the form player, so they must
answer instantly and never fail, even on cyclic or half-edited forms.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from formflow.conditions import evaluate_condition
from formflow.model import END, Question, QuestionIndex, Target

logger = logging.getLogger(__name__)

# Safety cap on projection steps, as a multiple of the question count
ITERATION_FACTOR = 2

Questions = Union[QuestionIndex, Sequence[Question]]


def resolve_next(
    question: Question,
    questions: Questions,
    answers: Optional[Mapping[str, Any]],
) -> Target:
    """
    Decide which question follows ``question``.

    Precedence (first match wins):
        1. The first branch rule, in declared order, whose condition holds.
        2. An explicitly configured default-next (END or a question id).
        3. The next question in list order, or END after the last one.

    Returns:
        A question id or END. Target ids are not checked for existence.
    """
    for rule in question.branches:
        if evaluate_condition(rule.condition, answers):
            return rule.target

    if question.default_next.is_configured:
        return question.default_next.target

    return QuestionIndex.of(questions).next_id(question.id)


def project_path(
    questions: Questions,
    answers: Optional[Mapping[str, Any]],
    start_id: Optional[str] = None,
) -> List[Question]:
    """
    Predict the ordered list of questions a respondent will see.

    Walks from ``start_id`` (or the first question) applying resolve_next
    until END, a question seen before, an unknown id, or the step cap of
    ``ITERATION_FACTOR * len(questions)``.

    Returns:
        The path built before stopping. Never contains END.
    """
    index = QuestionIndex.of(questions)
    if not len(index):
        return []

    path: List[Question] = []
    visited = set()
    cursor: Target = start_id or index.first_id()
    max_iterations = ITERATION_FACTOR * len(index)
    iterations = 0

    while cursor is not END:
        if iterations >= max_iterations:
            logger.debug("Path projection hit step cap of %d", max_iterations)
            break
        iterations += 1

        if cursor in visited:
            logger.debug("Path projection stopped at revisited question %s", cursor)
            break
        visited.add(cursor)

        question = index.get(cursor)
        if question is None:
            logger.debug("Path projection stopped at unknown question id %r", cursor)
            break

        path.append(question)
        cursor = resolve_next(question, index, answers)

    return path


def path_progress(path: Sequence[Question], current_id: str) -> float:
    """
    Percent complete for a respondent sitting on ``current_id``.

    (position in path + 1) / path length * 100, or 0.0 when the question
    is not on the path.
    """
    for pos, question in enumerate(path):
        if question.id == current_id:
            return (pos + 1) / len(path) * 100
    return 0.0


def has_branching(question: Question) -> bool:
    """True if the question has rules or an explicit default-next."""
    return bool(question.branches) or question.default_next.is_configured
