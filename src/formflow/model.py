"""
Core Form Model Objects

Defines the data structures the branching engine reads:
    - QuestionType (the fixed set of question kinds)
    - Question (a node of the form)
    - BranchRule (a conditional edge out of a question)
    - DefaultNext (the tri-state fallback edge)
    - QuestionIndex (ordered questions with O(1) id lookup)

ARCHITECTURAL RULE:
    These objects:
        - Are authored by an external editor
        - Are only read by the engine
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .conditions import Condition


class QuestionType(str, Enum):
    """Question kinds supported by the form builder."""

    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    DROPDOWN = "dropdown"
    CHECKBOXES = "checkboxes"
    EMAIL = "email"
    PHONE = "phone"
    NUMBER = "number"
    DATE = "date"
    RATING = "rating"
    OPINION_SCALE = "opinion_scale"
    YES_NO = "yes_no"
    FILE_UPLOAD = "file_upload"
    URL = "url"
    LOCATION = "location"


CHOICE_TYPES = frozenset({QuestionType.DROPDOWN, QuestionType.CHECKBOXES})
BOOLEAN_TYPES = frozenset({QuestionType.YES_NO})
SCALE_TYPES = frozenset({QuestionType.RATING, QuestionType.OPINION_SCALE})


class FormEnd(Enum):
    """Sentinel type for the end of the form."""

    END = "END"

    def __repr__(self) -> str:
        return "END"


END = FormEnd.END

Target = Union[str, FormEnd]


class DefaultNextKind(Enum):
    NOT_CONFIGURED = "not_configured"
    END = "end"
    GOTO = "goto"


@dataclass(frozen=True)
class DefaultNext:
    """
    Fallback edge used when no branch rule matches.

    Three distinguishable states:
        NOT_CONFIGURED: fall through to the next question in list order
        END:            finish the form
        GOTO:           jump to ``question_id``

    Why not Optional[str]?
        "No fallback set" and "fallback is the end of the form" are
        different instructions. A None would conflate them.
    """

    kind: DefaultNextKind = DefaultNextKind.NOT_CONFIGURED
    question_id: Optional[str] = None

    @classmethod
    def not_configured(cls) -> "DefaultNext":
        return cls(DefaultNextKind.NOT_CONFIGURED)

    @classmethod
    def end(cls) -> "DefaultNext":
        return cls(DefaultNextKind.END)

    @classmethod
    def goto(cls, question_id: str) -> "DefaultNext":
        return cls(DefaultNextKind.GOTO, question_id)

    @classmethod
    def from_target(cls, target: Optional[Target]) -> "DefaultNext":
        """None -> not configured, END -> end, str -> goto."""
        if target is None:
            return cls.not_configured()
        if target is END:
            return cls.end()
        return cls.goto(target)

    @property
    def is_configured(self) -> bool:
        return self.kind is not DefaultNextKind.NOT_CONFIGURED

    @property
    def is_end(self) -> bool:
        return self.kind is DefaultNextKind.END

    @property
    def target(self) -> Optional[Target]:
        """END or the question id when configured, None otherwise."""
        if self.kind is DefaultNextKind.END:
            return END
        if self.kind is DefaultNextKind.GOTO:
            return self.question_id
        return None


@dataclass(frozen=True)
class BranchRule:
    """
    An ordered condition + target pair attached to a question.

    Properties:
        id: Rule identifier (stable, used by editors to address the rule)
        condition: Condition that must hold for the rule to fire
        target: Question id to continue with, or END

    IMPORTANT:
        The target is NOT checked for existence.
        A dangling target simply ends path projection.
    """

    id: str
    condition: Condition
    target: Target = END


@dataclass
class Question:
    """
    A single question of a form.

    Properties:
        id: Unique identifier within the form
        type: QuestionType
        title: Question text
        description: Optional help text
        required: Whether an answer is mandatory (player concern)
        options: Choices for dropdown / checkboxes
        min_value / max_value: Bounds for rating / opinion_scale
        branches: Branch rules, evaluated in declared order
        default_next: Fallback edge when no rule matches
    """

    id: str
    type: QuestionType = QuestionType.SHORT_TEXT
    title: str = ""
    description: Optional[str] = None
    required: bool = False
    options: List[str] = field(default_factory=list)
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    branches: List[BranchRule] = field(default_factory=list)
    default_next: DefaultNext = field(default_factory=DefaultNext)

    def __post_init__(self):
        # accept plain strings such as "dropdown"
        if not isinstance(self.type, QuestionType):
            self.type = QuestionType(self.type)


class QuestionIndex:
    """
    Ordered questions plus an id -> position lookup.

    The question graph may contain cycles and dangling ids, so edges are
    kept as ids and resolved through this index rather than as object
    references.

    Duplicate ids are tolerated: the first occurrence wins.
    """

    def __init__(self, questions: Iterable[Question]):
        self.questions: Tuple[Question, ...] = tuple(questions)
        self._positions: Dict[str, int] = {}
        for pos, question in enumerate(self.questions):
            self._positions.setdefault(question.id, pos)

    @classmethod
    def of(cls, questions: Union["QuestionIndex", Sequence[Question]]) -> "QuestionIndex":
        if isinstance(questions, QuestionIndex):
            return questions
        return cls(questions)

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self):
        return iter(self.questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._positions

    def position(self, question_id: str) -> Optional[int]:
        """Position of a question id, or None if absent."""
        return self._positions.get(question_id)

    def get(self, question_id: str) -> Optional[Question]:
        pos = self._positions.get(question_id)
        if pos is None:
            return None
        return self.questions[pos]

    def first_id(self) -> Optional[str]:
        if not self.questions:
            return None
        return self.questions[0].id

    def next_id(self, question_id: str) -> Target:
        """Id of the question after ``question_id`` in list order, or END."""
        pos = self._positions.get(question_id)
        if pos is None or pos >= len(self.questions) - 1:
            return END
        return self.questions[pos + 1].id

    def before(self, question_id: str) -> List[Question]:
        pos = self._positions.get(question_id)
        if pos is None:
            return []
        return list(self.questions[:pos])

    def after(self, question_id: str) -> List[Question]:
        pos = self._positions.get(question_id)
        if pos is None:
            return []
        return list(self.questions[pos + 1:])
