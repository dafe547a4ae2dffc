"""
Graphviz DOT diagram generator for branching forms.

Converts a question list into Graphviz DOT format for visualization.

Supports two modes:
    - SIMPLE: Question flow only (no rule labels)
    - DETAILED: Rule conditions on edges, question types on nodes
"""

from enum import Enum
from typing import List, Sequence, Union

from formflow.conditions import Condition, Operator
from formflow.model import END, Question, QuestionIndex


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"      # Just question flow
    DETAILED = "detailed"  # Include rule conditions


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    # Escape backslashes first
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _escape_dot_id(identifier: str) -> str:
    """Escape/quote an identifier for DOT."""
    if identifier in ("START", "END"):
        # keep real questions with these ids apart from the marker nodes
        return f'"q:{identifier}"'
    if not identifier or identifier[0].isdigit() or not identifier.replace('_', '').isalnum():
        return _escape_dot_string(identifier)
    return identifier


def _condition_label(condition: Condition) -> str:
    """Render a condition as readable edge text."""
    operator = condition.operator
    op_str = operator.label if isinstance(operator, Operator) else str(operator)
    value = condition.value
    if isinstance(value, (list, tuple)):
        value_str = "[" + ", ".join(str(v) for v in value) + "]"
    else:
        value_str = str(value)
    return f"{condition.question_id} {op_str} {value_str}"


def _target_node(target) -> str:
    return "END" if target is END else _escape_dot_id(target)


def generate_dot(questions: Union[QuestionIndex, Sequence[Question]], mode: DotMode = DotMode.SIMPLE) -> str:
    """
    Generate Graphviz DOT format for a form.

    Args:
        questions: Ordered questions to visualize
        mode: Visualization mode (SIMPLE, DETAILED)

    Returns:
        String containing DOT graph definition
    """
    index = QuestionIndex.of(questions)
    lines: List[str] = []
    edges: List[str] = []
    uses_end = False

    # Header
    lines.append("digraph form {")
    lines.append("  rankdir=LR;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    # =========================================================================
    # NODES
    # =========================================================================

    lines.append('  START [shape=ellipse, fillcolor=lightgreen, label="START"];')

    for question in index:
        label = question.title or question.id
        if mode == DotMode.DETAILED:
            label = f"{label}\n({question.type.value})"
        lines.append(f"  {_escape_dot_id(question.id)} [label={_escape_dot_string(label)}];")

    # =========================================================================
    # EDGES
    # =========================================================================

    first = index.first_id()
    if first is not None:
        edges.append(f"  START -> {_escape_dot_id(first)};")
    else:
        edges.append("  START -> END;")
        uses_end = True

    for question in index:
        from_id = _escape_dot_id(question.id)

        for rule in question.branches:
            uses_end = uses_end or rule.target is END
            edge_attr = " [style=dashed]"
            if mode == DotMode.DETAILED:
                label = _condition_label(rule.condition)
                # Shorten for readability
                if len(label) > 40:
                    label = label[:37] + "..."
                edge_attr = f" [style=dashed, label={_escape_dot_string(label)}]"
            edges.append(f"  {from_id} -> {_target_node(rule.target)}{edge_attr};")

        if question.default_next.is_configured:
            fallback = question.default_next.target
        else:
            fallback = index.next_id(question.id)
        uses_end = uses_end or fallback is END
        edges.append(f"  {from_id} -> {_target_node(fallback)};")

    if uses_end:
        lines.append('  END [shape=ellipse, fillcolor=lightgrey, label="END"];')

    lines.extend(edges)

    # Footer
    lines.append("}")

    return "\n".join(lines)


def save_dot_file(questions: Union[QuestionIndex, Sequence[Question]], filename: str,
                  mode: DotMode = DotMode.SIMPLE) -> None:
    """
    Generate DOT and save to file.

    Args:
        questions: Questions to visualize
        filename: Output file path (.dot extension recommended)
        mode: Visualization mode
    """
    dot = generate_dot(questions, mode=mode)
    with open(filename, 'w') as f:
        f.write(dot)


__all__ = ["DotMode", "generate_dot", "save_dot_file"]
