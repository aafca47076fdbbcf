from enum import Enum


class Phase(str, Enum):
    NOT_STARTED = 'not-started'
    QUESTIONING = 'questioning'
    RESULTS = 'results'
    ENDED = 'ended'

    @property
    def accepts_answers(self) -> bool:
        return self is Phase.QUESTIONING
