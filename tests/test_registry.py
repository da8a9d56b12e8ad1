from hangman.services.games.registry import DEFAULT_SESSION_KEY, SessionRegistry


def test_default_session_is_prepopulated():
    reg = SessionRegistry()
    assert DEFAULT_SESSION_KEY in reg._machines
    assert list(reg._machines) == [DEFAULT_SESSION_KEY]
    assert reg.get() is reg.get(DEFAULT_SESSION_KEY)


def test_other_keys_created_on_demand_and_released_when_empty():
    reg = SessionRegistry()
    machine = reg.get('side')
    assert 'side' in reg._machines
    machine.join('a', 'A')
    reg.release('side')
    assert 'side' in reg._machines
    machine.leave('a')
    reg.release('side')
    assert 'side' not in reg._machines


def test_default_session_survives_release():
    reg = SessionRegistry(default_key='main')
    machine = reg.get()
    machine.join('a', 'A')
    machine.leave('a')
    reg.release('main')
    assert 'main' in reg._machines
    assert reg.get().session.participants == []


def test_settings_flow_into_sessions():
    reg = SessionRegistry(default_rounds=5, chat_limit=2)
    machine = reg.get()
    assert machine.session.total_rounds == 5
    machine.join('a', 'A')
    machine.leave('a')
    assert machine.session.total_rounds == 5
    assert machine.chat_limit == 2


def test_init_app_reads_config(flask_app):
    reg = flask_app.extensions['hangman']
    assert reg.default_key == 'test-room'
    assert list(reg._machines) == ['test-room']
