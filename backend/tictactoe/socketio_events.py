from flask import current_app, request
from flask_socketio import emit
from tictactoe import protocol, socketio
from tictactoe.exceptions import GameError, InternalFault
from tictactoe.services.games import GameService


def _service() -> GameService:
    return current_app.extensions['tictactoe']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _display_name(data):
    # createGame sends a bare name; joinGame sends an object
    if isinstance(data, str):
        return data
    data = data or {}
    return data.get('username') or data.get('displayName')


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    try:
        _service().lifecycle.disconnect(sid)
    except Exception:
        current_app.logger.exception(f"[disconnect-error] sid={sid}")


def handle_create_game(data=None):
    try:
        _service().lifecycle.create_session(_display_name(data), _get_sid())
    except GameError as exc:
        emit(protocol.GAME_CREATED, {'success': False, **exc.to_dict()})
    except Exception:
        current_app.logger.exception('Error creating game')
        emit(protocol.GAME_CREATED, {'success': False, **InternalFault('Failed to create game').to_dict()})


def handle_join_game(data=None):
    try:
        data = data or {}
        _service().lifecycle.join_session(data.get('gameId'), _display_name(data), _get_sid())
    except GameError as exc:
        emit(protocol.JOIN_ERROR, exc.to_dict())
    except Exception:
        current_app.logger.exception('Error joining game')
        emit(protocol.JOIN_ERROR, InternalFault('Failed to join game').to_dict())


def handle_make_move(data=None):
    try:
        data = data or {}
        _service().moves.make_move(data.get('gameId'), data.get('cellIndex'), _get_sid())
    except GameError as exc:
        emit(protocol.MOVE_ERROR, exc.to_dict())
    except Exception:
        current_app.logger.exception('Error making move')
        emit(protocol.MOVE_ERROR, InternalFault('Failed to make move').to_dict())


def handle_send_message(data=None):
    try:
        data = data or {}
        _service().chat.send_message(
            data.get('gameId'), data.get('message'), data.get('sender'), data.get('senderId'), _get_sid()
        )
    except Exception:
        current_app.logger.exception('Error sending message')


def handle_request_rematch(data=None):
    # The return value is the Socket.IO acknowledgement
    try:
        _service().lifecycle.request_rematch((data or {}).get('gameId'))
    except GameError as exc:
        return exc.to_dict()
    except Exception:
        current_app.logger.exception('Error handling rematch')
        return InternalFault('Failed to process rematch').to_dict()
    return {'success': True}


def handle_leave_game(data=None):
    try:
        _service().lifecycle.leave((data or {}).get('gameId'), _get_sid())
    except Exception:
        current_app.logger.exception('Error leaving game')


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register the game's Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(protocol.CREATE_GAME, handle_create_game, namespace=namespace)
    socketio.on_event(protocol.JOIN_GAME, handle_join_game, namespace=namespace)
    socketio.on_event(protocol.MAKE_MOVE, handle_make_move, namespace=namespace)
    socketio.on_event(protocol.SEND_MESSAGE, handle_send_message, namespace=namespace)
    socketio.on_event(protocol.REQUEST_REMATCH, handle_request_rematch, namespace=namespace)
    socketio.on_event(protocol.LEAVE_GAME, handle_leave_game, namespace=namespace)
