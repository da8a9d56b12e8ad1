from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import Config
from hangman.services.games.registry import SessionRegistry

socketio = SocketIO(async_mode=None)
registry = SessionRegistry()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or '*'
    CORS(flask_app, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)
    registry.init_app(flask_app)

    from hangman.main import main
    flask_app.register_blueprint(main)

    from hangman.api.session import session_api
    flask_app.register_blueprint(session_api, url_prefix='/api/session')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from hangman.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    flask_app.logger.info(f"[startup] session={registry.default_key} rounds={registry.default_rounds}")
    return flask_app
