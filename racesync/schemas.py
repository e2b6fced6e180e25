"""Pydantic data schemas shared by the websocket protocol and the HTTP routes.

Attribute names are snake_case; every model serialises to the camelCase
wire names via ``model_dump(by_alias=True)``.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------
# Runtime state
# -----------------------------

class Lap(WireModel):
    number: int
    time: float


class Participant(WireModel):
    """One connected identity inside a session."""

    id: str
    name: Optional[str] = None
    initial: Optional[str] = None


class StopwatchState(WireModel):
    is_running: bool = False
    start_time: Optional[float] = None
    elapsed_time: float = 0
    laps: List[Lap] = []


class SessionSnapshot(WireModel):
    id: str
    participants: List[Participant]
    stopwatch: StopwatchState


# -----------------------------
# Websocket messages
# -----------------------------

class InboundMessage(WireModel):
    type: str
    session_id: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None
    data: Any = None


# -----------------------------
# Archive request / response models
# -----------------------------

class SaveRaceRequest(WireModel):
    session_id: str
    name: Optional[str] = None


class RaceRecord(WireModel):
    id: str
    name: str
    total_time: float
    date: datetime
    participant_count: int
    laps: List[Lap]


__all__ = [
    "Lap",
    "Participant",
    "StopwatchState",
    "SessionSnapshot",
    "InboundMessage",
    "SaveRaceRequest",
    "RaceRecord",
]
