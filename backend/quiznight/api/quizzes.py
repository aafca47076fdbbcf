from flask import Blueprint, jsonify
from flask_login import login_required

from quiznight import db
from quiznight.models import Quiz


quizzes = Blueprint('quizzes', __name__)


@quizzes.route('', methods=['GET'])
@login_required
def list_quizzes():
    """Quizzes an admin can start a live session from."""
    rows = Quiz.query.order_by(Quiz.id).all()
    return jsonify([quiz.to_dict() for quiz in rows])


@quizzes.route('/<int:quiz_id>', methods=['GET'])
@login_required
def get_quiz(quiz_id):
    quiz = db.get_or_404(Quiz, quiz_id)
    payload = quiz.to_dict()
    payload['questions'] = [question.to_dict() for question in quiz.questions]
    return jsonify(payload)
