"""Game errors.

Services raise these; the Socket.IO handlers catch them at the boundary
and turn them into an error payload for the originating connection.
"""


class GameError(Exception):
    """Base class for every error a client can be told about."""
    code = 'internal_fault'
    message = 'Something went wrong'

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'error': self.message, 'code': self.code}


class SessionNotFound(GameError):
    code = 'not_found'
    message = 'Game not found'


class SessionFull(GameError):
    code = 'full'
    message = 'Game is full. Please create a new game.'


class AlreadyInSession(GameError):
    """The connection is already seated in a game."""
    code = 'already_in_session'
    message = 'You are already in a game. Leave it before joining another.'


class CellTaken(GameError):
    code = 'cell_taken'
    message = 'Space already taken'


class NotYourTurn(GameError):
    code = 'not_your_turn'
    message = 'Not your turn'


class InvalidMove(GameError):
    code = 'invalid_input'
    message = 'Cell index must be a whole number from 0 to 8'


class GameNotInProgress(GameError):
    code = 'not_in_progress'
    message = 'Game is not in progress'


class InternalFault(GameError):
    code = 'internal_fault'
