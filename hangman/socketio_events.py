from typing import Any, Dict, Iterable

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from hangman import registry, socketio
from hangman.services.games.events import Event

NAMESPACE = '/ws'

# Socket context: which session each joined sid belongs to
_sid_to_ctx: Dict[str, Dict[str, Any]] = {}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _room(key: str) -> str:
    return f"session:{key}"


def _dispatch(key: str, events: Iterable[Event]) -> None:
    """Deliver events in order: private ones to their sid, the rest to the session room."""
    for event in events:
        target = event.to if event.is_private else _room(key)
        socketio.emit(event.name, event.args, to=target, namespace=request.namespace)


def _run_action(action: str, *args) -> None:
    """Resolve the caller's session and apply one state machine action.

    Sockets that never joined are ignored. The session lock is held while
    the events go out so every member sees the same order of snapshots.
    """
    sid = _get_sid()
    ctx = _sid_to_ctx.get(sid)
    if not ctx:
        return
    key = ctx['session_key']
    machine = registry.get(key)
    with machine.lock:
        events = getattr(machine, action)(sid, *args)
        if not events:
            current_app.logger.debug(f"[ignored] action={action} sid={sid} session={key}")
            return
        _dispatch(key, events)


def _depart(sid: str) -> None:
    ctx = _sid_to_ctx.pop(sid, None)
    if not ctx:
        return
    key = ctx['session_key']
    machine = registry.get(key)
    with machine.lock:
        events = machine.leave(sid)
        _dispatch(key, events)
    registry.release(key)


def handle_connect(auth=None):
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_disconnect(reason=None):
    _depart(_get_sid())


def handle_join_game(data=None):
    sid = _get_sid()
    name = data.get('name') if isinstance(data, dict) else data
    # Clients cannot choose a room: everyone shares the configured slot
    key = registry.default_key
    machine = registry.get(key)
    with machine.lock:
        events = machine.join(sid, name)
        if machine.session.participant(sid) is not None:
            join_room(_room(key))
            _sid_to_ctx[sid] = {'session_key': key}
        _dispatch(key, events)


def handle_leave_game(data=None):
    sid = _get_sid()
    ctx = _sid_to_ctx.get(sid)
    if not ctx:
        return
    leave_room(_room(ctx['session_key']))
    _depart(sid)
    emit('left', {'room': _room(ctx['session_key'])})


def handle_set_rounds(value=None):
    _run_action('set_rounds', value)


def handle_set_ready(ready=None):
    _run_action('set_ready', ready)


def handle_submit_word(data=None):
    data = data if isinstance(data, dict) else {}
    _run_action('submit_word', data.get('word'), data.get('hint'))


def handle_request_hint(data=None):
    _run_action('request_hint')


def handle_guess(letter=None):
    _run_action('guess', letter)


def handle_next_round(data=None):
    _run_action('advance')


def handle_play_again(data=None):
    _run_action('vote_rematch')


def handle_chat_send(text=None):
    _run_action('send_chat', text)


def handle_ping(data=None):
    emit('pong', data or {})


_HANDLERS = (
    ('connect', handle_connect),
    ('disconnect', handle_disconnect),
    ('join_game', handle_join_game),
    ('leave_game', handle_leave_game),
    ('set_rounds', handle_set_rounds),
    ('set_ready', handle_set_ready),
    ('submit_word', handle_submit_word),
    ('request_hint', handle_request_hint),
    ('guess', handle_guess),
    ('next_round', handle_next_round),
    ('play_again', handle_play_again),
    ('chat_send', handle_chat_send),
    ('ping', handle_ping),
)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    _sid_to_ctx.clear()
    for name, handler in _HANDLERS:
        socketio.on_event(name, handler, namespace=NAMESPACE)

    if testing:
        # Test-only mirror on default namespace
        for name, handler in _HANDLERS:
            socketio.on_event(name, handler, namespace='/')
