import os
import sys
import pytest

# Ensure the backend root (containing the `quiznight` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from quiznight import create_app, db, socketio
from quiznight.services.live import (
    OptionSnapshot,
    QuestionSnapshot,
    QuestionType,
    SessionRegistry,
)


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False
    BCRYPT_LOG_ROUNDS = 4
    JOIN_CODE_LENGTH = 6
    RANGE_TOLERANCE_RATIO = 0.05
    CORS_ORIGINS = []


ADMIN_USERNAME = 'quizmaster'
ADMIN_PASSWORD = 'hunter22'


def choice_question(quiz_id, order, correct='b', letters='abc', question_type=QuestionType.MULTIPLE_CHOICE):
    qid = f'{quiz_id}-{order}'
    return QuestionSnapshot(
        id=qid,
        text=f'Question {order}?',
        order=order,
        type=question_type,
        options=tuple(
            OptionSnapshot(id=f'{qid}-{letter}', text=letter.upper(), is_correct=(letter == correct))
            for letter in letters
        ),
    )


def range_question(quiz_id, order, min_value=0, max_value=100, correct_value=50):
    return QuestionSnapshot(
        id=f'{quiz_id}-{order}',
        text=f'Guess a number ({order})',
        order=order,
        type=QuestionType.RANGE,
        min_value=min_value,
        max_value=max_value,
        correct_value=correct_value,
    )


class FakeQuestionSource:
    """In-memory stand-in for the quiz tables, keyed by quiz id then order."""

    def __init__(self):
        self.quizzes = {}
        self.calls = []

    def add(self, quiz_id, question):
        self.quizzes.setdefault(str(quiz_id), {})[question.order] = question
        return question

    def remove(self, quiz_id, order):
        self.quizzes.get(str(quiz_id), {}).pop(order, None)

    def find_question_by_quiz_and_order(self, quiz_id, order):
        self.calls.append((str(quiz_id), order))
        return self.quizzes.get(str(quiz_id), {}).get(order)


@pytest.fixture()
def questions():
    source = FakeQuestionSource()
    source.add('trivia', choice_question('trivia', 1, correct='b'))
    source.add('trivia', choice_question('trivia', 2, correct='c'))
    return source


@pytest.fixture()
def registry():
    return SessionRegistry()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import quiznight.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def admin(flask_app):
    from quiznight.models import Admin
    account = Admin(username=ADMIN_USERNAME)
    account.set_password(ADMIN_PASSWORD)
    db.session.add(account)
    db.session.commit()
    return account


@pytest.fixture()
def admin_client(flask_app, admin):
    test_client = flask_app.test_client()
    res = test_client.post('/login', json={'username': ADMIN_USERNAME, 'password': ADMIN_PASSWORD})
    assert res.status_code == 200
    return test_client


@pytest.fixture()
def quiz(flask_app):
    """Two multiple-choice questions stored in the database."""
    from quiznight.seed import create_quiz
    return create_quiz('Pub Night', [
        {'text': 'Capital of France?', 'options': [('Paris', True), ('Lyon', False)]},
        {'text': 'Largest ocean?', 'options': [('Atlantic', False), ('Pacific', True)]},
    ])


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
