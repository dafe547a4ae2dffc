"""
Form Analyzer: read-only diagnostics for branching forms.

This module inspects a question list and reports:
    - Dangling targets (rule or default-next ids that do not exist)
    - Conditions on unknown or later questions
    - Targets that jump backwards
    - Reachability and cycles over every possible edge
    - Rules with unknown operators

IMPORTANT: The analyzer does NOT reject or repair a form.
Path projection already tolerates everything reported here; the report
only tells an author where the form will behave unexpectedly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from formflow.branching import has_branching
from formflow.conditions import Operator
from formflow.model import END, Question, QuestionIndex


def _possible_targets(question: Question, index: QuestionIndex) -> List[object]:
    """Every target the resolver could return for this question."""
    targets: List[object] = [rule.target for rule in question.branches]
    if question.default_next.is_configured:
        targets.append(question.default_next.target)
    else:
        targets.append(index.next_id(question.id))
    return targets


# DFS colours: unseen, on the current path, finished
_WHITE, _GREY, _BLACK = 0, 1, 2


def _find_cycle_dfs(graph: Dict[str, List[str]], start: str,
                    color: Dict[str, int]) -> Optional[List[str]]:
    """Iterative DFS from start; returns the first cycle as a closed path."""
    path: List[str] = [start]
    color[start] = _GREY
    stack = [iter(graph.get(start, []))]

    while stack:
        for neighbor in stack[-1]:
            state = color.get(neighbor, _WHITE)
            if state == _GREY:
                return path[path.index(neighbor):] + [neighbor]
            if state == _WHITE:
                color[neighbor] = _GREY
                path.append(neighbor)
                stack.append(iter(graph.get(neighbor, [])))
                break
        else:
            color[path.pop()] = _BLACK
            stack.pop()

    return None


@dataclass
class FormReport:
    """Diagnostics for a single form."""

    total_questions: int = 0
    total_rules: int = 0
    questions_with_branching: int = 0

    # (question id, missing target id)
    dangling_targets: List[Tuple[str, str]] = field(default_factory=list)
    # (question id, rule id, unknown source id)
    unknown_sources: List[Tuple[str, str, str]] = field(default_factory=list)
    # (question id, rule id, source id) where the source comes later
    forward_sources: List[Tuple[str, str, str]] = field(default_factory=list)
    # (question id, target id) where the target is not later
    backward_targets: List[Tuple[str, str]] = field(default_factory=list)
    # (question id, rule id, operator)
    unknown_operators: List[Tuple[str, str, str]] = field(default_factory=list)

    ends_form: List[str] = field(default_factory=list)
    unreachable_questions: Set[str] = field(default_factory=set)
    has_cycles: bool = False
    cycle_example: Optional[List[str]] = None

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_form(questions: Union[QuestionIndex, Sequence[Question]]) -> FormReport:
    """
    Inspect a question list and return a FormReport.

    Never raises and never modifies the questions.
    """
    index = QuestionIndex.of(questions)
    report = FormReport(total_questions=len(index))

    # =========================================================================
    # 1. RULE INVENTORY
    # =========================================================================

    for pos, question in enumerate(index):
        report.total_rules += len(question.branches)
        if has_branching(question):
            report.questions_with_branching += 1

        for rule in question.branches:
            source = rule.condition.question_id
            source_pos = index.position(source)
            if source_pos is None:
                report.unknown_sources.append((question.id, rule.id, source))
            elif source_pos > pos:
                report.forward_sources.append((question.id, rule.id, source))

            if not isinstance(rule.condition.operator, Operator):
                report.unknown_operators.append((question.id, rule.id, str(rule.condition.operator)))

        explicit = [rule.target for rule in question.branches]
        if question.default_next.is_configured:
            explicit.append(question.default_next.target)

        for target in explicit:
            if target is END:
                if question.id not in report.ends_form:
                    report.ends_form.append(question.id)
                continue
            target_pos = index.position(target)
            if target_pos is None:
                report.dangling_targets.append((question.id, target))
            elif target_pos <= pos:
                report.backward_targets.append((question.id, target))

    # =========================================================================
    # 2. GRAPH STRUCTURE
    # =========================================================================

    outgoing: Dict[str, List[str]] = {}
    for question in index:
        outgoing.setdefault(question.id, [])
        for target in _possible_targets(question, index):
            if target is not END and target in index and target not in outgoing[question.id]:
                outgoing[question.id].append(target)

    reachable: Set[str] = set()
    first = index.first_id()
    stack = [first] if first is not None else []
    while stack:
        node = stack.pop()
        if node in reachable:
            continue
        reachable.add(node)
        for neighbor in outgoing.get(node, []):
            if neighbor not in reachable:
                stack.append(neighbor)

    report.unreachable_questions = {q.id for q in index if q.id not in reachable}

    color: Dict[str, int] = {}
    for question_id in outgoing:
        if color.get(question_id, _WHITE) == _WHITE:
            cycle = _find_cycle_dfs(outgoing, question_id, color)
            if cycle:
                report.has_cycles = True
                report.cycle_example = cycle
                break

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.dangling_targets:
        report.add_warning(
            "Targets pointing at missing questions: "
            + ", ".join(f"{q} -> {t}" for q, t in report.dangling_targets)
        )

    if report.unknown_sources:
        report.add_warning(
            "Conditions on missing questions: "
            + ", ".join(f"{q} ({s})" for q, _, s in report.unknown_sources)
        )

    if report.forward_sources:
        report.add_warning(
            "Conditions on questions not yet answered: "
            + ", ".join(f"{q} ({s})" for q, _, s in report.forward_sources)
        )

    if report.backward_targets:
        report.add_warning(
            "Backward jumps: " + ", ".join(f"{q} -> {t}" for q, t in report.backward_targets)
        )

    if report.unknown_operators:
        report.add_warning(
            "Rules with unknown operators never match: "
            + ", ".join(f"{q}/{r} ({op})" for q, r, op in report.unknown_operators)
        )

    if report.unreachable_questions:
        report.add_warning(
            f"Unreachable questions: {', '.join(sorted(report.unreachable_questions))}"
        )

    if report.has_cycles:
        report.add_warning(
            f"Cycle detected: {' -> '.join(report.cycle_example)}"
        )

    return report
