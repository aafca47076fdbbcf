"""Live session engine: registry, phase pipeline, answers, roster and events.

Everything here is in-memory and transport agnostic. HTTP routes and socket
handlers call into these functions. Only ``SqlQuestionSource`` touches the
database, and it imports the models lazily.
"""

from .answers import Answer, AnswerBook, submit_answer
from .errors import InvalidState, LiveGameError, NotFound, Unauthorized
from .events import CorrectOptionEvent, EndEvent, EventChannel, NewQuestionEvent, Subscription
from .phase import Phase
from .questions import OptionSnapshot, QuestionSnapshot, QuestionSource, QuestionType, SqlQuestionSource
from .registry import SessionRegistry
from .roster import Player, Team, create_team, find_player, join_team, teams_snapshot
from .session import Session
from .state_machine import advance

__all__ = [
    'Answer', 'AnswerBook', 'submit_answer',
    'InvalidState', 'LiveGameError', 'NotFound', 'Unauthorized',
    'CorrectOptionEvent', 'EndEvent', 'EventChannel', 'NewQuestionEvent', 'Subscription',
    'Phase',
    'OptionSnapshot', 'QuestionSnapshot', 'QuestionSource', 'QuestionType', 'SqlQuestionSource',
    'SessionRegistry',
    'Player', 'Team', 'create_team', 'find_player', 'join_team', 'teams_snapshot',
    'Session',
    'advance',
]
