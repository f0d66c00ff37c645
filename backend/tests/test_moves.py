import threading

import pytest

from tictactoe.exceptions import CellTaken, GameNotInProgress, InvalidMove, NotYourTurn, SessionNotFound
from tictactoe.models import FINISHED, IN_PROGRESS


def _play(service, session_id, moves):
    for cell, sid in moves:
        service.moves.make_move(session_id, cell, sid)


def test_move_applies_symbol_and_flips_turn(service, transport, started_game):
    sid = started_game.session_id
    service.moves.make_move(sid, 4, 'sid-a')

    assert started_game.board[4] == 'X'
    assert started_game.current_player == 'O'
    assert transport.broadcast_events('moveMade')[-1] == {
        'board': [None, None, None, None, 'X', None, None, None, None],
        'winner': None,
        'currentPlayer': 'O',
        'gameId': sid,
    }


def test_turns_alternate(service, started_game):
    sid = started_game.session_id
    seen = []
    for cell, who in [(0, 'sid-a'), (4, 'sid-b'), (8, 'sid-a'), (2, 'sid-b')]:
        service.moves.make_move(sid, cell, who)
        seen.append(started_game.current_player)
    assert seen == ['O', 'X', 'O', 'X']


def test_unknown_session(service):
    with pytest.raises(SessionNotFound):
        service.moves.make_move('game_missing', 0, 'sid-a')


def test_occupied_cell_leaves_board_unchanged(service, started_game):
    sid = started_game.session_id
    service.moves.make_move(sid, 4, 'sid-a')
    before = list(started_game.board)

    with pytest.raises(CellTaken):
        service.moves.make_move(sid, 4, 'sid-b')
    assert started_game.board == before
    assert started_game.current_player == 'O'


def test_cell_taken_checked_before_turn(service, started_game):
    sid = started_game.session_id
    service.moves.make_move(sid, 4, 'sid-a')
    with pytest.raises(CellTaken):
        service.moves.make_move(sid, 4, 'sid-a')


def test_wrong_player(service, started_game):
    with pytest.raises(NotYourTurn):
        service.moves.make_move(started_game.session_id, 0, 'sid-b')


def test_stranger_cannot_move(service, started_game):
    with pytest.raises(NotYourTurn):
        service.moves.make_move(started_game.session_id, 0, 'sid-z')


@pytest.mark.parametrize('cell', [-1, 9, 100, '4', 4.0, None, True])
def test_invalid_cell_index(service, started_game, cell):
    with pytest.raises(InvalidMove):
        service.moves.make_move(started_game.session_id, cell, 'sid-a')
    assert started_game.board == [None] * 9


def test_no_moves_before_opponent_joins(service):
    record = service.lifecycle.create_session('alice', 'sid-a')
    with pytest.raises(GameNotInProgress):
        service.moves.make_move(record.session_id, 0, 'sid-a')


def test_row_win_halts_turns(service, transport, started_game):
    sid = started_game.session_id
    _play(service, sid, [(0, 'sid-a'), (4, 'sid-b'), (1, 'sid-a'), (5, 'sid-b'), (2, 'sid-a')])

    assert started_game.board == ['X', 'X', 'X', None, 'O', 'O', None, None, None]
    assert started_game.winner == 'X'
    assert started_game.status == FINISHED
    assert started_game.current_player == 'X'
    assert transport.broadcast_events('moveMade')[-1]['winner'] == 'X'

    with pytest.raises(NotYourTurn):
        service.moves.make_move(sid, 8, 'sid-b')
    with pytest.raises(GameNotInProgress):
        service.moves.make_move(sid, 8, 'sid-a')


def test_tie(service, started_game):
    sid = started_game.session_id
    # X O X / X O O / O X X
    _play(service, sid, [
        (0, 'sid-a'), (1, 'sid-b'), (2, 'sid-a'), (4, 'sid-b'), (3, 'sid-a'),
        (5, 'sid-b'), (7, 'sid-a'), (6, 'sid-b'), (8, 'sid-a'),
    ])
    assert started_game.board == ['X', 'O', 'X', 'X', 'O', 'O', 'O', 'X', 'X']
    assert started_game.winner == 'Tie'
    assert started_game.status == FINISHED


def test_play_continues_after_rematch(service, started_game):
    sid = started_game.session_id
    _play(service, sid, [(0, 'sid-a'), (4, 'sid-b'), (1, 'sid-a'), (5, 'sid-b'), (2, 'sid-a')])
    service.lifecycle.request_rematch(sid)

    service.moves.make_move(sid, 0, 'sid-a')
    assert started_game.status == IN_PROGRESS
    assert started_game.current_player == 'O'


def test_concurrent_moves_are_serialised(service, started_game):
    sid = started_game.session_id
    barrier = threading.Barrier(2)
    results = []

    def attempt(cell):
        barrier.wait()
        try:
            service.moves.make_move(sid, cell, 'sid-a')
            results.append('ok')
        except NotYourTurn:
            results.append('rejected')

    threads = [threading.Thread(target=attempt, args=(cell,)) for cell in (0, 8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == ['ok', 'rejected']
    assert started_game.board.count('X') == 1
    assert started_game.current_player == 'O'
