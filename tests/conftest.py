import os
import sys
import pytest

# Ensure the project root (containing the `hangman` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from hangman import create_app, socketio, registry
from hangman.services.games.machine import MatchStateMachine


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SESSION_KEY = 'test-room'
    DEFAULT_TOTAL_ROUNDS = 3
    CHAT_HISTORY_LIMIT = 200
    CORS_ORIGINS = '*'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application
    registry.reset()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for Socket.IO test clients on /ws; all are disconnected at teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()


@pytest.fixture()
def machine():
    return MatchStateMachine('unit')


@pytest.fixture()
def lobby(machine):
    """Machine with two joined players, alice in slot 0 and bob in slot 1."""
    machine.join('alice', 'Alice')
    machine.join('bob', 'Bob')
    return machine


def start_entry(m, rounds=1):
    m.set_rounds('alice', rounds)
    m.set_ready('alice', True)
    m.set_ready('bob', True)
    return m


def start_round_a(m, alice_word='CAT', bob_word='DOG', rounds=1):
    start_entry(m, rounds)
    m.submit_word('alice', alice_word, 'animal')
    m.submit_word('bob', bob_word, 'pet')
    return m


@pytest.fixture()
def helpers():
    class _Helpers:
        entry = staticmethod(start_entry)
        round_a = staticmethod(start_round_a)
    return _Helpers
