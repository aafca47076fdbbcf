from typing import List, Optional

from .answers import Answer
from .errors import NotFound
from .questions import QuestionSnapshot
from .roster import Player, iter_players

DEFAULT_TOLERANCE_RATIO = 0.05


def is_correct(answer: Optional[Answer], question: QuestionSnapshot, tolerance_ratio: float = DEFAULT_TOLERANCE_RATIO) -> bool:
    """Whether a stored answer earns the point for ``question``.

    Choice questions need an exact option id match. Range questions accept
    any value within ``tolerance_ratio`` of the question's (max - min) span
    around the correct value, bounds included.
    """
    if answer is None:
        return False
    if question.is_range:
        if answer.value is None or question.correct_value is None:
            return False
        span = abs((question.max_value or 0) - (question.min_value or 0))
        return abs(answer.value - question.correct_value) <= span * tolerance_ratio
    return answer.option_id is not None and answer.option_id == question.correct_option_id


def correct_players(session, question: QuestionSnapshot, tolerance_ratio: float = DEFAULT_TOLERANCE_RATIO) -> List[Player]:
    """Players whose answer to ``question`` is correct. Does not touch scores."""
    if question.is_range:
        if question.correct_value is None:
            raise NotFound('Correct value not found')
    elif question.correct_option_id is None:
        raise NotFound('Correct option not found')

    answers = session.answers.for_question(question.id)
    return [
        player for player in iter_players(session)
        if is_correct(answers.get(player.id), question, tolerance_ratio)
    ]


def score_current_question(session, question: QuestionSnapshot, tolerance_ratio: float = DEFAULT_TOLERANCE_RATIO) -> List[Player]:
    """Apply scoring for the question being revealed.

    +1 to each player whose answer is correct. Team scores are derived from
    their players, so nothing else needs updating.
    """
    winners = correct_players(session, question, tolerance_ratio)
    for player in winners:
        player.score += 1
    return winners
