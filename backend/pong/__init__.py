from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from pong.config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from pong.main import main
    flask_app.register_blueprint(main)

    # Handlers bind to the module-level socketio instance initialised above
    from pong.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    return flask_app
