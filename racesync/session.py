from __future__ import annotations

from typing import Dict, Optional

from .constants import DEFAULT_INITIAL
from .schemas import Participant, SessionSnapshot
from .stopwatch import Clock, Stopwatch, wall_clock_ms


def make_participant(participant_id: str, display_name: Optional[str] = None) -> Participant:
    """Build a participant, deriving the one-letter initial from the name."""
    name = display_name.strip() if display_name else None
    if not name:
        return Participant(id=participant_id, name=None, initial=DEFAULT_INITIAL)
    return Participant(id=participant_id, name=name, initial=name[0].upper())


class Session:
    """Runtime state of one live session: its participants and its stopwatch.

    Only ``SessionStore`` mutates sessions; everything else reads them.
    """

    def __init__(self, session_id: str, founder: Participant, clock: Clock = wall_clock_ms):
        self.session_id = session_id
        self.participants: Dict[str, Participant] = {founder.id: founder}
        self.stopwatch = Stopwatch(clock)

    # -------------------- Participant management -------------------- #

    def upsert_participant(self, participant: Participant) -> None:
        existing = self.participants.get(participant.id)
        if existing is not None:
            # Reconnect/rename: keep the original position in the roster.
            existing.name = participant.name
            existing.initial = participant.initial
            return
        self.participants[participant.id] = participant

    def remove_participant(self, participant_id: str) -> Optional[Participant]:
        return self.participants.pop(participant_id, None)

    def is_empty(self) -> bool:
        return not self.participants

    # -------------------- Snapshots -------------------- #

    def snapshot(self) -> SessionSnapshot:
        """Detached copy of the full session state, safe to serialise or archive."""
        return SessionSnapshot(
            id=self.session_id,
            participants=[p.model_copy() for p in self.participants.values()],
            stopwatch=self.stopwatch.snapshot(),
        )


__all__ = ["Session", "make_participant"]
