from flask import Blueprint, current_app, jsonify
from tictactoe.exceptions import SessionNotFound

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the tic-tac-toe game server!'})


@main.route('/health')
def health():
    service = current_app.extensions['tictactoe']
    return jsonify({'status': 'healthy', 'sessions': len(service.store)})


@main.route('/api/games/<string:game_id>/state', methods=['GET'])
def get_game_state(game_id):
    """
    Returns a snapshot of one live game.
    """
    service = current_app.extensions['tictactoe']
    try:
        return jsonify(service.lifecycle.get_state(game_id))
    except SessionNotFound as exc:
        return jsonify(exc.to_dict()), 404
