from flask import Blueprint, jsonify

from hangman import registry
from hangman.models import ROUND_PHASES
from hangman.services.games.views import serialize_lobby, serialize_round

session_api = Blueprint('session_api', __name__)


@session_api.route('/state', methods=['GET'])
def get_session_state():
    """Read-only snapshot of the shared session; submitted words and hints stay private."""
    machine = registry.get()
    with machine.lock:
        s = machine.session
        payload = {
            'lobby': serialize_lobby(s),
            'round': serialize_round(s) if s.phase in ROUND_PHASES else None,
        }
    return jsonify(payload)
