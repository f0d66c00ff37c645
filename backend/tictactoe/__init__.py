from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from tictactoe.config import Config
from tictactoe.services.games import GameService, SessionStore
from tictactoe.transport import SocketIOTransport

socketio = SocketIO(async_mode=None)


def _parse_origins(value):
    if not value or value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _parse_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One session table per app instance; handlers reach it via extensions
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['tictactoe'] = GameService(
        SessionStore(),
        SocketIOTransport(socketio, namespace),
        logger=flask_app.logger,
        timestamp_format=flask_app.config.get('CHAT_TIMESTAMP_FORMAT', '%H:%M:%S'),
    )

    from tictactoe.main import main
    flask_app.register_blueprint(main)

    from tictactoe.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    @click.command('serve')
    @click.option('--host', default=None, help='Address to listen on.')
    @click.option('--port', default=None, type=int, help='Port to listen on.')
    def serve_command(host, port):
        """Runs the Socket.IO game server."""
        host = host or flask_app.config['HOST']
        port = port or flask_app.config['PORT']
        flask_app.logger.info(f"[serve] listening on http://{host}:{port}")
        debug = flask_app.config.get('DEBUG', False)
        socketio.run(flask_app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=debug)

    flask_app.cli.add_command(serve_command)

    return flask_app
