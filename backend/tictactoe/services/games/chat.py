from datetime import datetime

from tictactoe import protocol
from tictactoe.exceptions import SessionNotFound


def sanitize(message: str) -> str:
    return message.replace('<', '&lt;').replace('>', '&gt;')


class MessagingRelay:
    """Best-effort chat. Messages for unknown sessions are dropped."""

    def __init__(self, store, transport, logger, clock=datetime.now, timestamp_format='%H:%M:%S'):
        self.store = store
        self.transport = transport
        self.logger = logger
        self.clock = clock
        self.timestamp_format = timestamp_format

    def send_message(self, session_id, message, sender, sender_id, requester_id):
        if not isinstance(message, str):
            self.logger.debug(f"[chat-drop] game={session_id} sid={requester_id} non-text message")
            return None
        try:
            with self.store.locked(session_id) as record:
                if not sender:
                    participant = record.find_player(requester_id)
                    sender = participant.display_name if participant else None
                payload = {
                    'gameId': session_id,
                    'sender': sender,
                    'senderId': sender_id,
                    'message': sanitize(message),
                    'timestamp': self.clock().strftime(self.timestamp_format),
                }
                self.transport.broadcast(protocol.MESSAGE_RECEIVED, payload, session_id, exclude=requester_id)
                self.transport.send(protocol.MESSAGE_SENT, dict(payload, sender='You'), requester_id)
        except SessionNotFound:
            self.logger.debug(f"[chat-drop] game={session_id} sid={requester_id} unknown game")
            return None
        return payload
