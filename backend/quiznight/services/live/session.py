from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import uuid4

from .answers import AnswerBook
from .events import EventChannel
from .phase import Phase
from .roster import Team


@dataclass(eq=False)
class Session:
    """One live run of a quiz. Lives in memory for the life of the process."""

    name: str
    quiz_id: str
    code: str
    id: str = field(default_factory=lambda: uuid4().hex)
    phase: Phase = Phase.NOT_STARTED
    question_number: int = 0
    teams: List[Team] = field(default_factory=list)
    answers: AnswerBook = field(default_factory=AnswerBook, repr=False)
    events: EventChannel = field(default=None, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.events is None:
            self.events = EventChannel(name=f"session:{self.id}")

    @property
    def player_count(self) -> int:
        return sum(len(t.players) for t in self.teams)

    def to_summary(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'quiz_id': self.quiz_id,
            'code': self.code,
            'phase': self.phase.value,
            'question_number': self.question_number,
            'team_count': len(self.teams),
            'player_count': self.player_count,
        }

    def to_dict(self) -> dict:
        """Full admin view, including every player's score."""
        return {
            'id': self.id,
            'name': self.name,
            'quiz_id': self.quiz_id,
            'code': self.code,
            'phase': self.phase.value,
            'question_number': self.question_number,
            'created_at': self.created_at.isoformat(),
            'teams': [t.to_dict() for t in self.teams],
        }

    def to_public_dict(self) -> dict:
        """View for players joining by code: no scores."""
        return {
            'id': self.id,
            'name': self.name,
            'phase': self.phase.value,
            'code': self.code,
            'teams': [t.to_public_dict() for t in self.teams],
        }
