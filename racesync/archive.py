"""Writes completed races to the archive.

Only detached snapshots are written, never the live ``Session``.
"""
from __future__ import annotations

import logging
from typing import Optional

from .models import Race
from .schemas import RaceRecord
from .session import Session

log = logging.getLogger(__name__)


async def save_race(session: Session, name: Optional[str] = None) -> Race:
    snapshot = session.snapshot()
    total_time = session.stopwatch.current_elapsed()
    race = await Race.create(
        name=(name or "").strip() or f"Race {snapshot.id}",
        total_time=total_time,
        participant_count=len(snapshot.participants),
        laps=[lap.model_dump() for lap in snapshot.stopwatch.laps],
    )
    log.info("Archived session %s as race %s", snapshot.id, race.id)
    return race


def to_record(race: Race) -> RaceRecord:
    return RaceRecord(
        id=str(race.id),
        name=race.name,
        total_time=race.total_time,
        date=race.date,
        participant_count=race.participant_count,
        laps=race.laps or [],
    )


__all__ = ["save_race", "to_record"]
