import logging
import random
import string
import threading
from typing import Dict, List

from .errors import NotFound
from .session import Session

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_join_code(length: int = 6) -> str:
    """Generate a short, human-typeable join code."""
    return ''.join(random.choices(CODE_ALPHABET, k=length))


class SessionRegistry:
    """All live sessions of this process, by id and by join code.

    Sessions are kept until the process exits; there is no removal.
    """

    def __init__(self, code_length: int = 6, max_code_attempts: int = 10):
        self.code_length = code_length
        self.max_code_attempts = max_code_attempts
        self._sessions: Dict[str, Session] = {}
        self._by_code: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions

    def _unique_code(self) -> str:
        length = self.code_length
        while True:
            for _ in range(self.max_code_attempts):
                code = generate_join_code(length)
                if code not in self._by_code:
                    return code
            # Code space is crowded at this length; widen it
            length += 1

    def create(self, name: str, quiz_id) -> Session:
        with self._lock:
            session = Session(name=name, quiz_id=str(quiz_id), code=self._unique_code())
            self._sessions[session.id] = session
            self._by_code[session.code] = session.id
        logger.info(f"[create] session={session.id} code={session.code} quiz={session.quiz_id}")
        return session

    def get_by_id(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFound('Session not found')
        return session

    def get_by_code(self, code: str) -> Session:
        session_id = self._by_code.get((code or '').strip().upper())
        if session_id is None:
            raise NotFound('Session not found')
        return self._sessions[session_id]

    def list_summaries(self) -> List[dict]:
        with self._lock:
            sessions = list(self._sessions.values())
        return [s.to_summary() for s in sessions]
