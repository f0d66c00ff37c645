"""Game domain services: board rules, session store, lifecycle, moves, chat.

This package holds the game mechanics. It publishes through a Transport
and never imports Flask or Socket.IO, so it can be driven directly in tests.
"""
from .service import GameService
from .store import SessionStore

__all__ = ['GameService', 'SessionStore']
