"""Phase pipeline of a live session.

    not-started -> questioning -> results -> questioning -> ... -> ended

``advance`` is the only way to move a session between phases. It runs under
the session lock so concurrent advances on one session are serialized, and it
fetches everything it needs before mutating, so a failure leaves the session
exactly as it was.
"""

import logging

from .errors import NotFound
from .events import CorrectOptionEvent, EndEvent, NewQuestionEvent
from .phase import Phase
from .questions import QuestionSource
from .roster import teams_snapshot
from .scoring import DEFAULT_TOLERANCE_RATIO, score_current_question

logger = logging.getLogger(__name__)


def advance(session, question_source: QuestionSource, tolerance_ratio: float = DEFAULT_TOLERANCE_RATIO) -> int:
    """Move ``session`` to its next phase and return its question number."""
    with session.lock:
        phase = session.phase
        if phase in (Phase.NOT_STARTED, Phase.RESULTS):
            _serve_next_question(session, question_source)
        elif phase == Phase.QUESTIONING:
            _reveal_results(session, question_source, tolerance_ratio)
        else:
            logger.info(f"[advance-noop] session={session.id} phase={phase.value}")
            return session.question_number
        logger.info(
            f"[advance] session={session.id} {phase.value} -> {session.phase.value} question={session.question_number}"
        )
        return session.question_number


def _serve_next_question(session, question_source: QuestionSource) -> None:
    next_number = session.question_number + 1
    question = question_source.find_question_by_quiz_and_order(session.quiz_id, next_number)
    session.question_number = next_number

    if question is None:
        # No more questions: final scores
        session.phase = Phase.ENDED
        session.events.publish(EndEvent(teams=teams_snapshot(session)))
        return

    session.phase = Phase.QUESTIONING
    session.events.publish(NewQuestionEvent.from_question(question))


def _reveal_results(session, question_source: QuestionSource, tolerance_ratio: float) -> None:
    question = question_source.find_question_by_quiz_and_order(session.quiz_id, session.question_number)
    if question is None:
        raise NotFound('Question not found')

    winners = score_current_question(session, question, tolerance_ratio)
    session.phase = Phase.RESULTS
    logger.info(
        f"[score] session={session.id} question={question.id} answers={session.answers.count(question.id)} correct={len(winners)}"
    )

    if question.is_range:
        event = CorrectOptionEvent(
            question_id=question.id,
            correct_value=question.correct_value,
            teams=teams_snapshot(session),
        )
    else:
        event = CorrectOptionEvent(
            question_id=question.id,
            option_id=question.correct_option_id,
            teams=teams_snapshot(session),
        )
    session.events.publish(event)
