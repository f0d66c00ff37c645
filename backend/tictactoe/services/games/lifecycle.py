from typing import Optional

from tictactoe import protocol
from tictactoe.exceptions import SessionFull, SessionNotFound
from tictactoe.models import (
    IN_PROGRESS, O, X, Participant, SessionRecord, default_display_name,
)

JOIN_NOT_FOUND = 'Game not found. Please check the Game ID.'


def _clean_name(display_name) -> str:
    if isinstance(display_name, str) and display_name.strip():
        return display_name.strip()
    return default_display_name()


class SessionLifecycle:
    """Creates, joins, leaves and resets sessions.

    Every mutation and the events describing it happen while the record's
    lock is held, so peers observe changes to one session in commit order.
    """

    def __init__(self, store, transport, logger):
        self.store = store
        self.transport = transport
        self.logger = logger

    def create_session(self, display_name, requester_id) -> SessionRecord:
        """Open a session with the requester seated as X.

        A connection sits in at most one session, so creating moves it out of
        its current one. Raises AlreadyInSession if a concurrent join seats the
        connection elsewhere in between.
        """
        previous = self.store.find_session_for(requester_id)
        if previous is not None:
            self.leave(previous, requester_id)

        name = _clean_name(display_name)
        record = self.store.create(Participant(connection_id=requester_id, display_name=name, symbol=X))
        with record.lock:
            self.transport.add_to_group(requester_id, record.session_id)
            self.transport.send(protocol.GAME_CREATED, {
                'success': True,
                'gameId': record.session_id,
                'username': name,
                'board': list(record.board),
            }, requester_id)
        self.logger.info(f"[create] game={record.session_id} host={name} sid={requester_id}")
        return record

    def join_session(self, session_id, display_name, requester_id) -> Participant:
        with self.store.locked(session_id, JOIN_NOT_FOUND) as record:
            if record.is_full:
                raise SessionFull()
            self.store.claim_seat(requester_id, session_id)

            participant = Participant(connection_id=requester_id, display_name=_clean_name(display_name), symbol=O)
            record.players.append(participant)
            record.status = IN_PROGRESS
            self.transport.add_to_group(requester_id, session_id)
            self.transport.broadcast(protocol.GAME_STARTED, {
                'players': record.players_payload(),
                'board': list(record.board),
                'currentPlayer': record.current_player,
                'gameId': session_id,
            }, session_id)
            self.transport.send(protocol.JOIN_SUCCESS, {'symbol': O, 'gameId': session_id}, requester_id)
        self.logger.info(f"[join] game={session_id} player={participant.display_name} sid={requester_id}")
        return participant

    def leave(self, session_id, requester_id, disconnected=False) -> Optional[Participant]:
        """Remove ``requester_id`` from the session; unknown ids are a no-op.

        The remaining participant, if any, is told and reseated as X on a
        fresh board so the next joiner takes O. An emptied session is dropped.
        """
        try:
            with self.store.locked(session_id) as record:
                departed = record.remove_player(requester_id)
                self.store.release_seat(requester_id, session_id)
                self.transport.remove_from_group(requester_id, session_id)
                if departed is None:
                    return None
                departed.disconnected = disconnected

                if record.players:
                    record.players[0].symbol = X
                    record.reset_board()
                    payload = {
                        'gameId': session_id,
                        'username': departed.display_name,
                        'disconnected': disconnected,
                        'players': record.players_payload(),
                        'board': list(record.board),
                        'currentPlayer': record.current_player,
                    }
                    for player in record.players:
                        self.transport.send(protocol.PLAYER_LEFT, payload, player.connection_id)
                else:
                    self.store.delete(session_id)
                    self.transport.close_group(session_id)
        except SessionNotFound:
            self.store.release_seat(requester_id, session_id)
            self.transport.remove_from_group(requester_id, session_id)
            return None

        self.logger.info(
            f"[leave] game={session_id} player={departed.display_name} disconnected={disconnected} "
            f"remaining={len(record.players)}"
        )
        return departed

    def disconnect(self, requester_id) -> Optional[Participant]:
        session_id = self.store.find_session_for(requester_id)
        if session_id is None:
            return None
        return self.leave(session_id, requester_id, disconnected=True)

    def request_rematch(self, session_id) -> SessionRecord:
        with self.store.locked(session_id) as record:
            record.reset_board()
            self.transport.broadcast(protocol.REMATCH_ACCEPTED, {
                'board': list(record.board),
                'currentPlayer': record.current_player,
                'gameId': session_id,
            }, session_id)
        self.logger.info(f"[rematch] game={session_id} status={record.status}")
        return record

    def get_state(self, session_id):
        with self.store.locked(session_id) as record:
            return record.to_dict()
