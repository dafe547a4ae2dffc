"""
Tests for eligibility and value queries.
"""

from formflow.eligibility import (
    CONDITIONABLE_TYPES,
    branchable_questions,
    can_branch,
    conditionable_questions,
    question_values,
)
from formflow.examples import build_colour_form, build_feedback_form
from formflow.model import Question, QuestionType


def ids(questions):
    return [q.id for q in questions]


class TestConditionableQuestions:
    """Questions that can feed a condition."""

    def test_first_question_has_none(self):
        questions = build_colour_form()
        assert conditionable_questions(questions[0], questions) == []

    def test_earlier_allow_listed_only(self):
        """q2 is short_text, so only the dropdown q1 qualifies."""
        questions = build_colour_form()
        assert ids(conditionable_questions(questions[2], questions)) == ["q1"]

    def test_absent_question(self):
        assert conditionable_questions(Question(id="ghost"), build_colour_form()) == []

    def test_feedback_form(self):
        questions = build_feedback_form()
        recommend = questions[5]
        assert ids(conditionable_questions(recommend, questions)) == ["used", "features", "rating"]

    def test_allow_list(self):
        assert QuestionType.OPINION_SCALE in CONDITIONABLE_TYPES
        assert QuestionType.NUMBER not in CONDITIONABLE_TYPES


class TestBranchableQuestions:
    """Questions that can be jumped to."""

    def test_all_later_questions_any_type(self):
        questions = build_colour_form()
        assert ids(branchable_questions(questions[0], questions)) == ["q2", "q3"]

    def test_last_question(self):
        questions = build_colour_form()
        assert branchable_questions(questions[2], questions) == []

    def test_absent_question(self):
        assert branchable_questions(Question(id="ghost"), build_colour_form()) == []

    def test_can_branch(self):
        questions = build_colour_form()
        assert not can_branch(questions[0], questions)
        assert can_branch(questions[1], questions)
        assert not can_branch(questions[2], questions)


class TestQuestionValues:
    """Discrete values a question can produce."""

    def test_dropdown_options(self):
        q = Question(id="q", type=QuestionType.DROPDOWN, options=["Red", "Blue"])
        assert question_values(q) == ["Red", "Blue"]

    def test_checkboxes_without_options(self):
        assert question_values(Question(id="q", type=QuestionType.CHECKBOXES)) == []

    def test_yes_no(self):
        assert question_values(Question(id="q", type=QuestionType.YES_NO)) == ["Yes", "No"]

    def test_rating(self):
        q = Question(id="q", type=QuestionType.RATING, min_value=1, max_value=5)
        assert question_values(q) == ["1", "2", "3", "4", "5"]

    def test_rating_defaults(self):
        assert question_values(Question(id="q", type=QuestionType.RATING)) == ["1", "2", "3", "4", "5"]

    def test_opinion_scale_defaults(self):
        q = Question(id="q", type=QuestionType.OPINION_SCALE)
        assert question_values(q) == [str(i) for i in range(1, 11)]

    def test_custom_range(self):
        q = Question(id="q", type=QuestionType.OPINION_SCALE, min_value=3, max_value=6)
        assert question_values(q) == ["3", "4", "5", "6"]

    def test_zero_bound_uses_default(self):
        q = Question(id="q", type=QuestionType.OPINION_SCALE, min_value=0, max_value=4)
        assert question_values(q) == ["1", "2", "3", "4"]

    def test_inverted_range(self):
        q = Question(id="q", type=QuestionType.RATING, min_value=5, max_value=2)
        assert question_values(q) == []

    def test_free_form_types(self):
        for qtype in (QuestionType.SHORT_TEXT, QuestionType.NUMBER, QuestionType.LOCATION):
            assert question_values(Question(id="q", type=qtype)) == []

    def test_options_are_copied(self):
        options = ["a"]
        values = question_values(Question(id="q", type=QuestionType.DROPDOWN, options=options))
        values.append("b")
        assert options == ["a"]
