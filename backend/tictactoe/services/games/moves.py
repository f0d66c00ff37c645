from tictactoe import protocol
from tictactoe.exceptions import CellTaken, GameNotInProgress, InvalidMove, NotYourTurn
from tictactoe.models import BOARD_SIZE, FINISHED, IN_PROGRESS, SessionRecord
from .board import evaluate, other_symbol


def _cell(cell_index) -> int:
    if isinstance(cell_index, bool) or not isinstance(cell_index, int):
        raise InvalidMove()
    if not 0 <= cell_index < BOARD_SIZE:
        raise InvalidMove()
    return cell_index


class MoveEngine:

    def __init__(self, store, transport, logger):
        self.store = store
        self.transport = transport
        self.logger = logger

    def make_move(self, session_id, cell_index, requester_id) -> SessionRecord:
        """Validate and apply one move, then broadcast the new board.

        Checks run in order and the first failure wins: unknown session,
        bad index, occupied cell, wrong player, game not running.
        """
        with self.store.locked(session_id) as record:
            index = _cell(cell_index)
            if record.board[index] is not None:
                raise CellTaken()
            player = record.find_player(requester_id)
            if player is None or player.symbol != record.current_player:
                raise NotYourTurn()
            if record.status != IN_PROGRESS:
                raise GameNotInProgress()

            record.board[index] = player.symbol
            outcome = evaluate(record.board)
            if outcome is None:
                record.current_player = other_symbol(record.current_player)
            else:
                record.winner = outcome
                record.status = FINISHED

            self.transport.broadcast(protocol.MOVE_MADE, {
                'board': list(record.board),
                'winner': record.winner,
                'currentPlayer': record.current_player,
                'gameId': session_id,
            }, session_id)
        self.logger.info(
            f"[move] game={session_id} symbol={player.symbol} cell={index} winner={record.winner}"
        )
        return record
