"""
Tests for the Graphviz DOT generator.

Verifies nodes, rule edges, fallback edges and the END node in both modes.
"""

import pytest
from formflow.backends import DotMode, generate_dot, save_dot_file
from formflow.backends.dot_generator import _escape_dot_id, _escape_dot_string
from formflow.conditions import Condition, Operator
from formflow.examples import build_colour_form, build_feedback_form
from formflow.model import BranchRule, Question


class TestEscaping:
    """Identifier and label quoting."""

    def test_plain_id(self):
        assert _escape_dot_id("q1") == "q1"

    def test_id_with_dash(self):
        assert _escape_dot_id("q-1") == '"q-1"'

    def test_id_starting_with_digit(self):
        assert _escape_dot_id("1q") == '"1q"'

    def test_reserved_marker_ids(self):
        assert _escape_dot_id("END") == '"q:END"'

    def test_quotes_in_label(self):
        assert _escape_dot_string('Say "hi"') == '"Say \\"hi\\""'

    def test_empty_label(self):
        assert _escape_dot_string("") == '""'


class TestSimpleMode:
    """SIMPLE mode: structure only."""

    def test_header_and_footer(self):
        dot = generate_dot(build_colour_form())
        assert dot.startswith("digraph form {")
        assert dot.endswith("}")

    def test_nodes_and_edges(self):
        dot = generate_dot(build_colour_form())
        assert "START -> q1;" in dot
        assert "q1 -> q3 [style=dashed];" in dot
        assert "q1 -> q2;" in dot
        assert "q2 -> q3;" in dot
        assert "q3 -> END;" in dot
        assert 'END [shape=ellipse' in dot

    def test_no_condition_labels(self):
        dot = generate_dot(build_colour_form(), mode=DotMode.SIMPLE)
        assert "equals" not in dot

    def test_empty_form(self):
        dot = generate_dot([])
        assert "START -> END;" in dot


class TestDetailedMode:
    """DETAILED mode: conditions and types."""

    def test_condition_label(self):
        dot = generate_dot(build_colour_form(), mode=DotMode.DETAILED)
        assert 'label="q1 equals Red"' in dot
        assert "(dropdown)" in dot

    def test_list_value_label(self):
        dot = generate_dot(build_feedback_form(), mode=DotMode.DETAILED)
        assert "rating is one of [1, 2]" in dot

    def test_long_label_truncated(self):
        questions = [
            Question(id="a", branches=[
                BranchRule(id="r", condition=Condition("a", Operator.CONTAINS, "x" * 60), target="b"),
            ]),
            Question(id="b"),
        ]
        dot = generate_dot(questions, mode=DotMode.DETAILED)
        assert "..." in dot


def test_one_edge_per_rule():
    questions = build_feedback_form()
    dot = generate_dot(questions)
    rule_count = sum(len(q.branches) for q in questions)
    assert dot.count("[style=dashed]") == rule_count


def test_save_dot_file(tmp_path):
    out = tmp_path / "form.dot"
    save_dot_file(build_colour_form(), str(out), mode=DotMode.DETAILED)
    assert out.read_text() == generate_dot(build_colour_form(), mode=DotMode.DETAILED)
