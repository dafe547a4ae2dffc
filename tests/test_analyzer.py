"""
Tests for the Form Analyzer.

Tests verify that the analyzer correctly:
    - Counts questions and rules
    - Detects dangling targets and unknown sources
    - Flags backward jumps and conditions on later questions
    - Finds reachability and cycles
"""

from formflow.analyzer import analyze_form
from formflow.conditions import Condition, Operator
from formflow.examples import build_colour_form, build_feedback_form
from formflow.model import END, BranchRule, DefaultNext, Question


def test_clean_colour_form():
    """The colour form has no problems."""
    report = analyze_form(build_colour_form())

    assert report.total_questions == 3
    assert report.total_rules == 1
    assert report.questions_with_branching == 1
    assert report.dangling_targets == []
    assert report.unreachable_questions == set()
    assert not report.has_cycles
    assert report.warnings == []


def test_feedback_form_ends():
    report = analyze_form(build_feedback_form())

    assert "used" in report.ends_form
    assert "recommend" in report.ends_form
    assert report.unreachable_questions == set()
    assert not report.has_cycles


def test_two_cycle():
    """A -> B -> A is reported with an example."""
    questions = [
        Question(id="A", default_next=DefaultNext.goto("B")),
        Question(id="B", default_next=DefaultNext.goto("A")),
    ]
    report = analyze_form(questions)

    assert report.has_cycles
    assert report.cycle_example == ["A", "B", "A"]
    assert ("B", "A") in report.backward_targets
    assert any("Cycle detected" in w for w in report.warnings)


def test_dangling_targets():
    questions = [
        Question(id="A", branches=[
            BranchRule(id="r1", condition=Condition("A", Operator.EQUALS, "x"), target="ghost"),
        ]),
        Question(id="B", default_next=DefaultNext.goto("phantom")),
    ]
    report = analyze_form(questions)

    assert ("A", "ghost") in report.dangling_targets
    assert ("B", "phantom") in report.dangling_targets
    assert any("missing questions" in w for w in report.warnings)


def test_condition_sources():
    questions = [
        Question(id="A", branches=[
            BranchRule(id="r1", condition=Condition("B", Operator.EQUALS, "x"), target=END),
            BranchRule(id="r2", condition=Condition("nobody", Operator.EQUALS, "x"), target=END),
        ]),
        Question(id="B"),
    ]
    report = analyze_form(questions)

    assert report.forward_sources == [("A", "r1", "B")]
    assert report.unknown_sources == [("A", "r2", "nobody")]


def test_unreachable_question():
    """B is skipped by A's unconditional default-next."""
    questions = [
        Question(id="A", default_next=DefaultNext.goto("C")),
        Question(id="B"),
        Question(id="C"),
    ]
    report = analyze_form(questions)

    assert report.unreachable_questions == {"B"}


def test_unknown_operator():
    questions = [
        Question(id="A"),
        Question(id="B", branches=[
            BranchRule(id="r1", condition=Condition("A", "greater_than", "1"), target=END),
        ]),
    ]
    report = analyze_form(questions)

    assert report.unknown_operators == [("B", "r1", "greater_than")]


def test_empty_form():
    report = analyze_form([])

    assert report.total_questions == 0
    assert report.warnings == []


def test_long_linear_form():
    """A chain longer than the recursion limit is analysed without error."""
    questions = [Question(id=f"q{i}") for i in range(3000)]
    report = analyze_form(questions)

    assert report.total_questions == 3000
    assert not report.has_cycles
    assert report.unreachable_questions == set()


def test_long_cycle():
    """The last question of a long chain jumps back to the first."""
    questions = [Question(id=f"q{i}") for i in range(2999)]
    questions.append(Question(id="q2999", default_next=DefaultNext.goto("q0")))
    report = analyze_form(questions)

    assert report.has_cycles
    assert report.cycle_example[0] == "q0"
    assert report.cycle_example[-1] == "q0"
    assert len(report.cycle_example) == 3001
