"""Per-session event fan-out.

Every phase transition publishes one event on the session's channel. Listeners
are plain callbacks registered under an integer handle; ``subscribe`` wraps a
listener in a queue so in-process consumers can iterate events lazily.
Nothing is buffered for listeners that attach later.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Optional, Tuple, Union

from .questions import QuestionSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewQuestionEvent:
    type: ClassVar[str] = 'new_question'

    question_id: str
    question: str
    order: int
    question_type: str
    options: Tuple[dict, ...] = field(default_factory=tuple)
    image_url: Optional[str] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    @classmethod
    def from_question(cls, question: QuestionSnapshot) -> 'NewQuestionEvent':
        return cls(
            question_id=question.id,
            question=question.text,
            order=question.order,
            question_type=question.type.value,
            options=tuple(o.to_public_dict() for o in question.options),
            image_url=question.image_url,
            min_value=question.min_value if question.is_range else None,
            max_value=question.max_value if question.is_range else None,
        )

    def to_dict(self) -> dict:
        payload = {
            'type': self.type,
            'question_id': self.question_id,
            'question': self.question,
            'order': self.order,
            'question_type': self.question_type,
            'image_url': self.image_url,
            'options': list(self.options),
        }
        if self.min_value is not None or self.max_value is not None:
            payload['min_value'] = self.min_value
            payload['max_value'] = self.max_value
        return payload


@dataclass(frozen=True)
class CorrectOptionEvent:
    type: ClassVar[str] = 'correct_option'

    question_id: str
    teams: List[dict]
    option_id: Optional[str] = None
    correct_value: Optional[float] = None

    def to_dict(self) -> dict:
        payload = {
            'type': self.type,
            'question_id': self.question_id,
            'teams': self.teams,
        }
        if self.option_id is not None:
            payload['option_id'] = self.option_id
        if self.correct_value is not None:
            payload['correct_value'] = self.correct_value
        return payload


@dataclass(frozen=True)
class EndEvent:
    type: ClassVar[str] = 'end'

    teams: List[dict]

    def to_dict(self) -> dict:
        return {'type': self.type, 'teams': self.teams}


GameEvent = Union[NewQuestionEvent, CorrectOptionEvent, EndEvent]
Listener = Callable[[GameEvent], None]


class EventChannel:
    def __init__(self, name: str = '') -> None:
        self.name = name
        self._listeners: Dict[int, Listener] = {}
        self._handles = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def add_listener(self, listener: Listener) -> int:
        with self._lock:
            handle = next(self._handles)
            self._listeners[handle] = listener
        return handle

    def remove_listener(self, handle: int) -> bool:
        with self._lock:
            return self._listeners.pop(handle, None) is not None

    def publish(self, event: GameEvent) -> int:
        """Deliver ``event`` to every attached listener. Returns how many got it."""
        with self._lock:
            targets = list(self._listeners.items())
        delivered = 0
        dead = []
        for handle, listener in targets:
            try:
                listener(event)
                delivered += 1
            except Exception:
                logger.exception(f"[publish] channel={self.name} listener={handle} failed; detaching")
                dead.append(handle)
        for handle in dead:
            self.remove_listener(handle)
        logger.debug(f"[publish] channel={self.name} type={event.type} delivered={delivered}")
        return delivered

    def subscribe(self) -> 'Subscription':
        return Subscription(self)


_CLOSED = object()


class Subscription:
    """Lazy, unbounded iterator over events published after it was created.

    Iteration blocks until the next event arrives and stops only once
    ``close`` is called.
    """

    def __init__(self, channel: EventChannel) -> None:
        self._channel = channel
        self._queue: 'queue.Queue' = queue.Queue()
        self._closed = False
        self._handle = channel.add_listener(self._queue.put)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._channel.remove_listener(self._handle)
        self._queue.put(_CLOSED)

    def get(self, timeout: Optional[float] = None) -> GameEvent:
        """Next event; raises ``queue.Empty`` on timeout and ``StopIteration`` once closed."""
        if self._closed and self._queue.empty():
            raise StopIteration
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            raise StopIteration
        return item

    def __iter__(self):
        return self

    def __next__(self) -> GameEvent:
        return self.get()

    def __enter__(self) -> 'Subscription':
        return self

    def __exit__(self, *exc) -> None:
        self.close()
