import logging
from datetime import datetime

from .chat import MessagingRelay
from .lifecycle import SessionLifecycle
from .moves import MoveEngine
from .store import SessionStore


class GameService:
    """One store and one transport shared by the lifecycle, move and chat services."""

    def __init__(self, store: SessionStore, transport, logger=None, clock=datetime.now,
                 timestamp_format='%H:%M:%S'):
        self.store = store
        self.transport = transport
        self.logger = logger or logging.getLogger(__name__)
        self.lifecycle = SessionLifecycle(store, transport, self.logger)
        self.moves = MoveEngine(store, transport, self.logger)
        self.chat = MessagingRelay(store, transport, self.logger, clock=clock,
                                   timestamp_format=timestamp_format)
