import math

from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required

from quiznight import REGISTRY_KEY, QUESTION_SOURCE_KEY
from quiznight.services.live import (
    SessionRegistry,
    advance,
    create_team,
    join_team,
    submit_answer,
)
from quiznight.services.live.scoring import DEFAULT_TOLERANCE_RATIO


sessions = Blueprint('sessions', __name__)


def _registry() -> SessionRegistry:
    return current_app.extensions[REGISTRY_KEY]


def _question_source():
    return current_app.extensions[QUESTION_SOURCE_KEY]


def _tolerance_ratio() -> float:
    try:
        return float(current_app.config.get('RANGE_TOLERANCE_RATIO', DEFAULT_TOLERANCE_RATIO))
    except (TypeError, ValueError):
        return DEFAULT_TOLERANCE_RATIO


def _as_id(value):
    """Ids travel as strings inside the engine; clients may send numbers."""
    if value is None or isinstance(value, bool):
        return None
    value = str(value).strip()
    return value or None


@sessions.route('', methods=['POST'])
@login_required
def create_session():
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    quiz_id = _as_id(data.get('quiz_id'))
    if not all([name, quiz_id]):
        return jsonify({'error': 'Session name and quiz_id are required'}), 400

    session = _registry().create(name, quiz_id)
    current_app.logger.info(f"[session-create] session={session.id} name={name!r} quiz={quiz_id}")
    return jsonify(session.to_summary()), 201


@sessions.route('', methods=['GET'])
@login_required
def list_sessions():
    return jsonify(_registry().list_summaries())


@sessions.route('/<string:session_id>', methods=['GET'])
@login_required
def get_session(session_id):
    return jsonify(_registry().get_by_id(session_id).to_dict())


@sessions.route('/code/<string:code>', methods=['GET'])
def get_session_by_code(code):
    return jsonify(_registry().get_by_code(code).to_public_dict())


@sessions.route('/<string:session_id>/teams', methods=['POST'])
def create_session_team(session_id):
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    if not name:
        return jsonify({'error': 'Team name is required'}), 400

    session = _registry().get_by_id(session_id)
    team = create_team(session, name)
    current_app.logger.info(f"[team-create] session={session.id} team={team.id} name={name!r}")
    return jsonify({'id': team.id, 'name': team.name}), 201


@sessions.route('/<string:session_id>/teams/<string:team_id>/players', methods=['POST'])
def join_session_team(session_id, team_id):
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    if not name:
        return jsonify({'error': 'Player name is required'}), 400

    session = _registry().get_by_id(session_id)
    player = join_team(session, team_id, name)
    current_app.logger.info(f"[join] session={session.id} team={team_id} player={player.id} name={name!r}")
    return jsonify({'id': player.id, 'name': player.name, 'team_id': player.team_id}), 201


@sessions.route('/<string:session_id>/answers', methods=['POST'])
def submit_session_answer(session_id):
    data = request.get_json(silent=True) or {}
    player_id = _as_id(data.get('player_id'))
    question_id = _as_id(data.get('question_id'))
    option_id = _as_id(data.get('option_id'))
    raw_value = data.get('value')

    if not all([player_id, question_id]):
        return jsonify({'error': 'player_id and question_id are required'}), 400
    if (option_id is None) == (raw_value is None):
        return jsonify({'error': 'Provide exactly one of option_id or value'}), 400

    value = None
    if raw_value is not None:
        if isinstance(raw_value, bool):
            return jsonify({'error': 'value must be a number'}), 400
        try:
            value = float(raw_value)
        except (TypeError, ValueError):
            return jsonify({'error': 'value must be a number'}), 400
        if not math.isfinite(value):
            return jsonify({'error': 'value must be a finite number'}), 400

    session = _registry().get_by_id(session_id)
    submit_answer(session, player_id, question_id, option_id=option_id, value=value)
    return jsonify({'success': True})


@sessions.route('/<string:session_id>/advance', methods=['POST'])
@login_required
def advance_session(session_id):
    session = _registry().get_by_id(session_id)
    question_number = advance(session, _question_source(), tolerance_ratio=_tolerance_ratio())
    return jsonify({'question_number': question_number, 'phase': session.phase.value})
