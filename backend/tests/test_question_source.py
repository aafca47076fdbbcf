from quiznight import db
from quiznight.models import Question
from quiznight.seed import create_quiz, DEMO_QUESTIONS
from quiznight.services.live import QuestionType, SqlQuestionSource


def test_finds_question_by_quiz_and_order(quiz):
    source = SqlQuestionSource()
    first = source.find_question_by_quiz_and_order(quiz.id, 1)

    assert first.text == 'Capital of France?'
    assert first.order == 1
    assert first.type == QuestionType.MULTIPLE_CHOICE
    assert [o.text for o in first.options] == ['Paris', 'Lyon']
    stored = Question.query.filter_by(quiz_id=quiz.id, order=1).first()
    assert first.id == str(stored.id)
    paris = next(o for o in stored.options if o.is_correct)
    assert paris.text == 'Paris'
    assert first.correct_option_id == str(paris.id)


def test_accepts_string_quiz_ids(quiz):
    source = SqlQuestionSource()
    assert source.find_question_by_quiz_and_order(str(quiz.id), 2).text == 'Largest ocean?'


def test_missing_order_or_quiz_returns_none(quiz):
    source = SqlQuestionSource()
    assert source.find_question_by_quiz_and_order(quiz.id, 3) is None
    assert source.find_question_by_quiz_and_order(quiz.id + 100, 1) is None
    assert source.find_question_by_quiz_and_order('not-a-number', 1) is None


def test_range_question_snapshot(flask_app):
    demo = create_quiz('Demo', DEMO_QUESTIONS)
    snapshot = SqlQuestionSource().find_question_by_quiz_and_order(demo.id, 3)

    assert snapshot.is_range
    assert snapshot.options == ()
    assert (snapshot.min_value, snapshot.max_value, snapshot.correct_value) == (1900, 2000, 1969)


def test_deleted_question_disappears(quiz):
    source = SqlQuestionSource()
    stored = Question.query.filter_by(quiz_id=quiz.id, order=1).first()
    db.session.delete(stored)
    db.session.commit()
    assert source.find_question_by_quiz_and_order(quiz.id, 1) is None
