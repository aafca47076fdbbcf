from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, Optional

from .errors import InvalidState
from .roster import find_player

if TYPE_CHECKING:
    from .session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Answer:
    """A chosen option id, or a numeric value for range questions."""

    option_id: Optional[str] = None
    value: Optional[float] = None
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AnswerBook:
    """Answers of one session, keyed by question id then player id.

    A later answer for the same (question, player) pair replaces the earlier one.
    """

    def __init__(self) -> None:
        self._by_question: Dict[str, Dict[str, Answer]] = {}

    def record(self, question_id: str, player_id: str, answer: Answer) -> None:
        self._by_question.setdefault(question_id, {})[player_id] = answer

    def get(self, question_id: str, player_id: str) -> Optional[Answer]:
        return self._by_question.get(question_id, {}).get(player_id)

    def for_question(self, question_id: str) -> Dict[str, Answer]:
        return dict(self._by_question.get(question_id, {}))

    def count(self, question_id: str) -> int:
        return len(self._by_question.get(question_id, {}))

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._by_question.values())


def submit_answer(
    session: 'Session',
    player_id: str,
    question_id: str,
    option_id: Optional[str] = None,
    value: Optional[float] = None,
) -> Answer:
    with session.lock:
        if not session.phase.accepts_answers:
            raise InvalidState('Can only submit answers during questioning phase')
        find_player(session, player_id)
        answer = Answer(option_id=option_id, value=value)
        session.answers.record(question_id, player_id, answer)
    logger.debug(f"[answer] session={session.id} question={question_id} player={player_id}")
    return answer
