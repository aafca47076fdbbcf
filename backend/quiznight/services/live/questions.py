"""Read-only view of stored quiz questions used while a session is live.

The engine never touches the ORM directly. It asks a question source for the
question at a given position of a quiz and works with the immutable snapshot
it gets back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Tuple


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = 'MULTIPLE_CHOICE'
    YES_NO = 'YES_NO'
    RANGE = 'RANGE'


@dataclass(frozen=True)
class OptionSnapshot:
    id: str
    text: str
    is_correct: bool = False

    def to_public_dict(self) -> dict:
        return {'id': self.id, 'text': self.text}


@dataclass(frozen=True)
class QuestionSnapshot:
    id: str
    text: str
    order: int
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    options: Tuple[OptionSnapshot, ...] = field(default_factory=tuple)
    image_url: Optional[str] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    correct_value: Optional[float] = None

    @property
    def is_range(self) -> bool:
        return self.type == QuestionType.RANGE

    @property
    def correct_option_id(self) -> Optional[str]:
        for option in self.options:
            if option.is_correct:
                return option.id
        return None


class QuestionSource(Protocol):
    def find_question_by_quiz_and_order(self, quiz_id: str, order: int) -> Optional[QuestionSnapshot]:
        ...


class SqlQuestionSource:
    """Question source backed by the ``Quiz``/``Question``/``Option`` tables.

    Must be called inside an application context.
    """

    def find_question_by_quiz_and_order(self, quiz_id, order: int) -> Optional[QuestionSnapshot]:
        from quiznight.models import Question

        try:
            quiz_pk = int(quiz_id)
        except (TypeError, ValueError):
            return None
        question = Question.query.filter_by(quiz_id=quiz_pk, order=order).first()
        if question is None:
            return None
        return snapshot_from_model(question)


def snapshot_from_model(question) -> QuestionSnapshot:
    options = tuple(
        OptionSnapshot(id=str(o.id), text=o.text, is_correct=bool(o.is_correct))
        for o in sorted(question.options, key=lambda o: o.id)
    )
    return QuestionSnapshot(
        id=str(question.id),
        text=question.text,
        order=question.order,
        type=QuestionType(question.type or QuestionType.MULTIPLE_CHOICE.value),
        options=options,
        image_url=question.image_url,
        min_value=question.min_value,
        max_value=question.max_value,
        correct_value=question.correct_value,
    )
