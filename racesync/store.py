"""Authoritative in-memory store of live sessions.

All operations return a falsy result (``False`` / ``None``) when the
session is missing or the stopwatch transition is invalid; they never
raise for those cases. Callers that need to tell the two apart re-query
with :meth:`SessionStore.get_session`.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .schemas import Lap
from .session import Session, make_participant
from .session_codes import generate_session_code
from .stopwatch import Clock, wall_clock_ms

log = logging.getLogger(__name__)


class SessionStore:
    def __init__(
        self,
        clock: Clock = wall_clock_ms,
        code_generator: Callable[[], str] = generate_session_code,
    ):
        self._clock = clock
        self._generate_code = code_generator
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    # -------------------- Session lifecycle -------------------- #

    def create_session(self, initiator_id: str, display_name: Optional[str] = None) -> str:
        session_id = self._generate_code()
        while session_id in self._sessions:
            session_id = self._generate_code()
        founder = make_participant(initiator_id, display_name)
        self._sessions[session_id] = Session(session_id, founder, clock=self._clock)
        log.info("Session %s created by %s", session_id, initiator_id)
        return session_id

    def get_session(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def join_session(
        self, session_id: str, participant_id: str, display_name: Optional[str] = None
    ) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        session.upsert_participant(make_participant(participant_id, display_name))
        log.info("Participant %s joined session %s", participant_id, session_id)
        return True

    def remove_participant(self, session_id: str, participant_id: str) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        session.remove_participant(participant_id)
        log.info("Participant %s left session %s", participant_id, session_id)
        if session.is_empty():
            del self._sessions[session_id]
            log.info("Session %s deleted (no participants left)", session_id)
        return True

    # -------------------- Stopwatch -------------------- #

    def start_stopwatch(self, session_id: str) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        started = session.stopwatch.start()
        log.debug("Session %s start -> %s", session_id, started)
        return started

    def stop_stopwatch(self, session_id: str) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        stopped = session.stopwatch.stop()
        log.debug("Session %s stop -> %s", session_id, stopped)
        return stopped

    def reset_stopwatch(self, session_id: str) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        session.stopwatch.reset()
        log.debug("Session %s reset", session_id)
        return True

    def record_lap(self, session_id: str) -> Optional[Lap]:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        lap = session.stopwatch.lap()
        log.debug("Session %s lap -> %s", session_id, lap)
        return lap


__all__ = ["SessionStore"]
