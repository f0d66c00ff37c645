import logging
import os
import sys
from collections import defaultdict
from datetime import datetime

import pytest

# Ensure the backend root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tictactoe import create_app, socketio
from tictactoe.services.games import GameService, SessionStore
from tictactoe.transport import Transport


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    HOST = '127.0.0.1'
    DEBUG = False
    PORT = 3001
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    LOG_LEVEL = 'DEBUG'
    CHAT_TIMESTAMP_FORMAT = '%H:%M:%S'


class RecordingTransport(Transport):
    """Keeps every event in memory instead of delivering it."""

    def __init__(self):
        self.sent = []
        self.broadcasts = []
        self.groups = defaultdict(set)
        self.closed = []

    def send(self, event, payload, connection_id):
        self.sent.append((connection_id, event, payload))

    def broadcast(self, event, payload, group, exclude=None):
        self.broadcasts.append((group, event, payload, exclude))

    def add_to_group(self, connection_id, group):
        self.groups[group].add(connection_id)

    def remove_from_group(self, connection_id, group):
        self.groups[group].discard(connection_id)

    def close_group(self, group):
        self.groups.pop(group, None)
        self.closed.append(group)

    def sent_to(self, connection_id, event=None):
        return [p for c, e, p in self.sent if c == connection_id and (event is None or e == event)]

    def broadcast_events(self, event):
        return [p for _, e, p, _ in self.broadcasts if e == event]


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def store():
    return SessionStore()


@pytest.fixture()
def service(store, transport):
    return GameService(
        store,
        transport,
        logger=logging.getLogger('tests'),
        clock=lambda: datetime(2024, 5, 1, 14, 30, 15),
    )


@pytest.fixture()
def started_game(service):
    """A game with alice as X (sid-a) and bob as O (sid-b)."""
    record = service.lifecycle.create_session('alice', 'sid-a')
    service.lifecycle.join_session(record.session_id, 'bob', 'sid-b')
    return record


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
