"""
Test the example forms shipped for demos.

Validates that the builders create the expected questions, rules and
default-next states.
"""

from formflow.examples import build_colour_form, build_feedback_form
from formflow.model import END, QuestionIndex, QuestionType


def test_colour_form_structure():
    questions = build_colour_form()

    assert [q.id for q in questions] == ["q1", "q2", "q3"]
    assert questions[0].type is QuestionType.DROPDOWN
    assert questions[0].options == ["Red", "Blue"]
    assert questions[0].branches[0].target == "q3"
    assert not questions[0].default_next.is_configured


def test_feedback_form_structure():
    index = QuestionIndex(build_feedback_form())

    # Every rule target exists or ends the form
    for question in index:
        for rule in question.branches:
            assert rule.target is END or rule.target in index

    assert index.get("recommend").default_next.is_end
    assert index.get("rating").default_next.target == "recommend"
    assert [r.id for r in index.get("rating").branches] == ["unhappy", "api-user"]


def test_builders_return_fresh_lists():
    first = build_feedback_form()
    first[0].branches.clear()
    assert build_feedback_form()[0].branches
