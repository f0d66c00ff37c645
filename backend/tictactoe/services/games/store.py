import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from tictactoe.exceptions import AlreadyInSession, SessionNotFound
from tictactoe.models import Participant, SessionRecord, generate_session_id


class SessionStore:
    """In-memory session table owned by one service instance.

    The store lock guards the id -> record map and the seat index
    (connection id -> session id). Mutations of a record happen under that
    record's own lock, taken through ``locked``. When both are needed the
    record lock is acquired first.
    """

    def __init__(self, id_factory=generate_session_id):
        self._sessions: Dict[str, SessionRecord] = {}
        self._seats: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._id_factory = id_factory

    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def session_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def create(self, host: Participant) -> SessionRecord:
        """Register a new session seating ``host``.

        Raises AlreadyInSession if the host's connection holds a seat.
        """
        with self._lock:
            if host.connection_id in self._seats:
                raise AlreadyInSession()
            session_id = self._id_factory()
            while session_id in self._sessions:
                session_id = self._id_factory()
            record = SessionRecord(session_id=session_id, players=[host])
            self._sessions[session_id] = record
            self._seats[host.connection_id] = session_id
        return record

    def get(self, session_id) -> Optional[SessionRecord]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id) -> Optional[SessionRecord]:
        with self._lock:
            record = self._sessions.pop(session_id, None)
            for connection_id in [c for c, s in self._seats.items() if s == session_id]:
                del self._seats[connection_id]
            return record

    def claim_seat(self, connection_id, session_id) -> None:
        """Seat ``connection_id`` in ``session_id`` or raise AlreadyInSession."""
        with self._lock:
            if connection_id in self._seats:
                raise AlreadyInSession()
            self._seats[connection_id] = session_id

    def release_seat(self, connection_id, session_id) -> None:
        with self._lock:
            if self._seats.get(connection_id) == session_id:
                del self._seats[connection_id]

    @contextmanager
    def locked(self, session_id, not_found_message=None) -> Iterator[SessionRecord]:
        """Hold the record's lock for the duration of the block.

        Raises SessionNotFound if the session does not exist or was deleted
        while waiting for the lock.
        """
        record = self.get(session_id)
        if record is None:
            raise SessionNotFound(not_found_message)
        with record.lock:
            if self.get(session_id) is not record:
                raise SessionNotFound(not_found_message)
            yield record

    def find_session_for(self, connection_id) -> Optional[str]:
        """Id of the session seating ``connection_id``, if any."""
        with self._lock:
            return self._seats.get(connection_id)
