import random
import string
import threading
from dataclasses import dataclass, field
from typing import List, Optional

X = 'X'
O = 'O'
TIE = 'Tie'

# Session status values
WAITING = 'waiting'
IN_PROGRESS = 'in-progress'
FINISHED = 'finished'

MAX_PLAYERS = 2
BOARD_SIZE = 9


def generate_session_id(length=9):
    """Random session id; uniqueness among live sessions is the store's job."""
    token = ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))
    return f"game_{token}"


def default_display_name():
    return f"Player_{random.randint(0, 999)}"


@dataclass
class Participant:
    connection_id: str
    display_name: str
    symbol: str
    disconnected: bool = False

    def to_dict(self):
        return {
            'id': self.connection_id,
            'username': self.display_name,
            'symbol': self.symbol,
            'disconnected': self.disconnected,
        }


@dataclass
class SessionRecord:
    session_id: str
    players: List[Participant] = field(default_factory=list)
    board: List[Optional[str]] = field(default_factory=lambda: [None] * BOARD_SIZE)
    current_player: str = X
    status: str = WAITING
    winner: Optional[str] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def find_player(self, connection_id: str) -> Optional[Participant]:
        for player in self.players:
            if player.connection_id == connection_id:
                return player
        return None

    def remove_player(self, connection_id: str) -> Optional[Participant]:
        player = self.find_player(connection_id)
        if player is not None:
            self.players.remove(player)
        return player

    def reset_board(self) -> None:
        """Fresh game for the seated players: empty board, X to move, no winner."""
        self.board = [None] * BOARD_SIZE
        self.current_player = X
        self.winner = None
        self.status = IN_PROGRESS if self.is_full else WAITING

    def players_payload(self):
        return [p.to_dict() for p in self.players]

    def to_dict(self):
        return {
            'gameId': self.session_id,
            'players': self.players_payload(),
            'board': list(self.board),
            'currentPlayer': self.current_player,
            'status': self.status,
            'winner': self.winner,
        }
