from flask import current_app, request
from flask_socketio import emit
from quiznight import socketio, REGISTRY_KEY
from quiznight.services.live import NotFound
from typing import Dict, Tuple


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(*args):
    _detach(_get_sid())


def handle_subscribe_events(data):
    """Attach this socket to a live session's event channel.

    Every event published afterwards is emitted to this socket under its
    type name (``new_question``, ``correct_option``, ``end``).
    """
    if not isinstance(data, dict):
        emit('error', {'message': 'session_id is required'})
        return
    session_id = data.get('session_id')
    player_id = data.get('player_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    try:
        session = current_app.extensions[REGISTRY_KEY].get_by_id(session_id)
    except NotFound as exc:
        emit('error', {'message': exc.message})
        return

    sid = _get_sid()
    # One subscription per socket; re-subscribing moves it
    _detach(sid)
    handle = session.events.add_listener(_forwarder(sid, request.namespace))
    _sid_to_subscription[sid] = (session.id, handle)
    current_app.logger.info(f"[subscribe] session={session.id} sid={sid} player={player_id}")
    emit('subscribed', {'session_id': session.id, 'phase': session.phase.value,
                        'question_number': session.question_number})


def handle_unsubscribe_events(data=None):
    detached = _detach(_get_sid())
    emit('unsubscribed', {'session_id': detached})


def handle_ping(data):
    emit('pong', data or {})

# ---- Subscription bookkeeping ----

_sid_to_subscription: Dict[str, Tuple[str, int]] = {}

def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore

def _forwarder(sid: str, namespace: str):
    def forward(event):
        # socketio.emit since publish runs outside this socket's handler
        socketio.emit(event.type, event.to_dict(), to=sid, namespace=namespace)
    return forward

def _detach(sid: str):
    """Remove this socket's listener, if any. Returns the session id it was on."""
    entry = _sid_to_subscription.pop(sid, None)
    if not entry:
        return None
    session_id, handle = entry
    registry = current_app.extensions.get(REGISTRY_KEY)
    if registry is not None and session_id in registry:
        registry.get_by_id(session_id).events.remove_listener(handle)
    current_app.logger.info(f"[unsubscribe] session={session_id} sid={sid}")
    return session_id


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
        socketio.on_event('subscribe_events', handle_subscribe_events, namespace=namespace)
        socketio.on_event('unsubscribe_events', handle_unsubscribe_events, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
