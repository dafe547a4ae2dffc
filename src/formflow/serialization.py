"""
Serialization helpers for forms and answer maps.

Provides dict / JSON / YAML conversion using the field names stored by
the form builder (camelCase on the wire, snake_case in Python).

Default-next on the wire:
    key absent            -> not configured
    "defaultNextId": null -> end of form
    "defaultNextId": "q3" -> go to q3
"""
from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import yaml

from formflow.conditions import Condition, Operator, coerce_operator
from formflow.model import END, BranchRule, DefaultNext, DefaultNextKind, Question, QuestionType


class FormLoadError(Exception):
    """Raised when a form document cannot be turned into questions."""
    pass


def _target_to_wire(target) -> str | None:
    return None if target is END else target


def _target_from_wire(raw: Any):
    return END if raw is None else str(raw)


def condition_to_dict(c: Condition) -> Dict[str, Any]:
    operator = c.operator.value if isinstance(c.operator, Operator) else c.operator
    value = list(c.value) if isinstance(c.value, (list, tuple)) else c.value
    return {"questionId": c.question_id, "operator": operator, "value": value}


def condition_from_dict(d: Mapping[str, Any]) -> Condition:
    operator = coerce_operator(d.get("operator", Operator.EQUALS.value))
    if not isinstance(operator, Operator):
        warnings.warn(f"Unknown branch operator {operator!r}; rule will never match", UserWarning)
    value = d.get("value", "")
    if isinstance(value, list):
        value = tuple(value)
    return Condition(question_id=str(d.get("questionId", "")), operator=operator, value=value)


def rule_to_dict(r: BranchRule) -> Dict[str, Any]:
    return {
        "id": r.id,
        "condition": condition_to_dict(r.condition),
        "nextQuestionId": _target_to_wire(r.target),
    }


def rule_from_dict(d: Mapping[str, Any]) -> BranchRule:
    if not isinstance(d, Mapping) or not isinstance(d.get("condition"), Mapping):
        raise FormLoadError(f"Branch rule must be a mapping with a condition: {d!r}")
    return BranchRule(
        id=str(d.get("id", "")),
        condition=condition_from_dict(d["condition"]),
        target=_target_from_wire(d.get("nextQuestionId")),
    )


def question_to_dict(q: Question) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": q.id,
        "type": q.type.value,
        "title": q.title,
        "required": q.required,
    }
    if q.description is not None:
        d["description"] = q.description
    if q.options:
        d["options"] = list(q.options)
    if q.min_value is not None:
        d["minValue"] = q.min_value
    if q.max_value is not None:
        d["maxValue"] = q.max_value
    if q.branches:
        d["branches"] = [rule_to_dict(r) for r in q.branches]
    if q.default_next.kind is not DefaultNextKind.NOT_CONFIGURED:
        d["defaultNextId"] = _target_to_wire(q.default_next.target)
    return d


def _required_flag(d: Mapping[str, Any]) -> bool:
    raw = d.get("required", False)
    if isinstance(raw, bool):
        return raw
    if raw is not None:
        warnings.warn(f"Non-boolean required flag {raw!r} for {d['id']}; treating as not required", UserWarning)
    return False


def question_from_dict(d: Mapping[str, Any]) -> Question:
    if not isinstance(d, Mapping):
        raise FormLoadError(f"Question must be a mapping, got {type(d).__name__}")
    if "id" not in d:
        raise FormLoadError(f"Question without id: {dict(d)!r}")

    raw_type = d.get("type", QuestionType.SHORT_TEXT.value)
    try:
        qtype = QuestionType(raw_type)
    except ValueError:
        warnings.warn(f"Unknown question type {raw_type!r} for {d['id']}; using short_text", UserWarning)
        qtype = QuestionType.SHORT_TEXT

    if "defaultNextId" in d:
        default_next = DefaultNext.from_target(_target_from_wire(d["defaultNextId"]))
    else:
        default_next = DefaultNext.not_configured()

    return Question(
        id=str(d["id"]),
        type=qtype,
        title=d.get("title", ""),
        description=d.get("description"),
        required=_required_flag(d),
        options=[str(o) for o in d.get("options") or []],
        min_value=d.get("minValue"),
        max_value=d.get("maxValue"),
        branches=[rule_from_dict(r) for r in d.get("branches") or []],
        default_next=default_next,
    )


def form_to_dict(questions: Sequence[Question], name: str = "") -> Dict[str, Any]:
    return {"name": name, "questions": [question_to_dict(q) for q in questions]}


def form_from_dict(d: Any) -> List[Question]:
    if isinstance(d, list):
        raw_questions = d
    elif isinstance(d, Mapping):
        raw_questions = d.get("questions") or []
    else:
        raise FormLoadError(f"Form document must be a mapping or a list, got {type(d).__name__}")
    if not isinstance(raw_questions, list):
        raise FormLoadError("'questions' must be a list")
    return [question_from_dict(q) for q in raw_questions]


def form_to_json(questions: Sequence[Question], name: str = "") -> str:
    return json.dumps(form_to_dict(questions, name), sort_keys=True)


def form_from_json(s: str) -> List[Question]:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise FormLoadError(f"Invalid JSON form: {e}") from e
    return form_from_dict(d)


def form_to_yaml(questions: Sequence[Question], name: str = "") -> str:
    return yaml.safe_dump(form_to_dict(questions, name), sort_keys=False)


def form_from_yaml(s: str) -> List[Question]:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise FormLoadError(f"Invalid YAML form: {e}") from e
    return form_from_dict(d)


def _read_document(path: str | Path) -> Any:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FormLoadError(f"File not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise FormLoadError(f"Cannot read {path}: {e}") from e
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise FormLoadError(f"Cannot parse {path}: {e}") from e


def load_form(path: str | Path) -> List[Question]:
    """Load questions from a .json file, or YAML for any other extension."""
    return form_from_dict(_read_document(path))


def load_answers(path: str | Path) -> Dict[str, Any]:
    """Load an answer map keyed by question id; an empty file gives {}."""
    d = _read_document(path)
    if d is None:
        return {}
    if not isinstance(d, Mapping):
        raise FormLoadError(f"Answers must be a mapping of question id to answer: {path}")
    return {str(k): v for k, v in d.items()}
