"""Socket.IO event names shared by the handlers and the game services."""

# Client -> server
CREATE_GAME = 'createGame'
JOIN_GAME = 'joinGame'
MAKE_MOVE = 'makeMove'
SEND_MESSAGE = 'sendMessage'
REQUEST_REMATCH = 'requestRematch'
LEAVE_GAME = 'leaveGame'

# Server -> client
GAME_CREATED = 'gameCreated'
GAME_STARTED = 'gameStarted'
JOIN_SUCCESS = 'joinSuccess'
JOIN_ERROR = 'joinError'
MOVE_MADE = 'moveMade'
MOVE_ERROR = 'moveError'
MESSAGE_RECEIVED = 'messageReceived'
MESSAGE_SENT = 'messageSent'
REMATCH_ACCEPTED = 'rematchAccepted'
PLAYER_LEFT = 'playerLeft'
