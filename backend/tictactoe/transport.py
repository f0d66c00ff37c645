"""Delivery surface the game services publish through.

Services never touch Socket.IO directly; they are handed a Transport.
Connections are addressed by their Socket.IO sid and sessions map onto
rooms named after the session id.
"""
from typing import Any, Dict, Optional


class Transport:

    def send(self, event: str, payload: Dict[str, Any], connection_id: str) -> None:
        raise NotImplementedError

    def broadcast(self, event: str, payload: Dict[str, Any], group: str,
                  exclude: Optional[str] = None) -> None:
        raise NotImplementedError

    def add_to_group(self, connection_id: str, group: str) -> None:
        raise NotImplementedError

    def remove_from_group(self, connection_id: str, group: str) -> None:
        raise NotImplementedError

    def close_group(self, group: str) -> None:
        raise NotImplementedError


class SocketIOTransport(Transport):
    """Transport backed by a Flask-SocketIO server on one namespace."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, event, payload, connection_id):
        self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def broadcast(self, event, payload, group, exclude=None):
        self.socketio.emit(event, payload, to=group, skip_sid=exclude, namespace=self.namespace)

    def add_to_group(self, connection_id, group):
        self.socketio.server.enter_room(connection_id, group, namespace=self.namespace)

    def remove_from_group(self, connection_id, group):
        self.socketio.server.leave_room(connection_id, group, namespace=self.namespace)

    def close_group(self, group):
        self.socketio.close_room(group, namespace=self.namespace)
