"""
Example forms for demos and tests.

build_colour_form: the smallest useful branch (Red skips the middle question).
build_feedback_form: a customer feedback form using every operator, an
explicit END and a default-next jump.
"""
from typing import List

from formflow.conditions import Condition, Operator
from formflow.model import END, BranchRule, DefaultNext, Question, QuestionType


def build_colour_form() -> List[Question]:
    q1 = Question(
        id="q1",
        type=QuestionType.DROPDOWN,
        title="Favourite colour?",
        options=["Red", "Blue"],
        branches=[
            BranchRule(
                id="r1",
                condition=Condition(question_id="q1", operator=Operator.EQUALS, value="Red"),
                target="q3",
            )
        ],
    )
    q2 = Question(id="q2", type=QuestionType.SHORT_TEXT, title="Why not red?")
    q3 = Question(id="q3", type=QuestionType.EMAIL, title="Email address")
    return [q1, q2, q3]


def build_feedback_form() -> List[Question]:
    used = Question(
        id="used",
        type=QuestionType.YES_NO,
        title="Have you used the product?",
        required=True,
        branches=[
            BranchRule(
                id="not-a-user",
                condition=Condition("used", Operator.EQUALS, "No"),
                target=END,
            )
        ],
    )
    features = Question(
        id="features",
        type=QuestionType.CHECKBOXES,
        title="Which features do you use?",
        options=["Reports", "Exports", "Sharing", "API"],
    )
    rating = Question(
        id="rating",
        type=QuestionType.RATING,
        title="How would you rate it?",
        min_value=1,
        max_value=5,
        branches=[
            BranchRule(
                id="unhappy",
                condition=Condition("rating", Operator.IN, ("1", "2")),
                target="complaint",
            ),
            BranchRule(
                id="api-user",
                condition=Condition("features", Operator.EQUALS, "API"),
                target="api",
            ),
        ],
        default_next=DefaultNext.goto("recommend"),
    )
    complaint = Question(
        id="complaint",
        type=QuestionType.LONG_TEXT,
        title="What went wrong?",
        branches=[
            BranchRule(
                id="billing",
                condition=Condition("complaint", Operator.CONTAINS, "billing"),
                target="contact",
            ),
        ],
        default_next=DefaultNext.goto("recommend"),
    )
    api = Question(id="api", type=QuestionType.LONG_TEXT, title="What would you add to the API?")
    recommend = Question(
        id="recommend",
        type=QuestionType.OPINION_SCALE,
        title="How likely are you to recommend us?",
        default_next=DefaultNext.end(),
    )
    contact = Question(id="contact", type=QuestionType.EMAIL, title="Where can billing reach you?")
    return [used, features, rating, complaint, api, recommend, contact]
