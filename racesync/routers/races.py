from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..archive import save_race, to_record
from ..models import Race
from ..schemas import RaceRecord, SaveRaceRequest
from ..state import Runtime, get_runtime

router = APIRouter(prefix="", tags=["races"])


@router.get("/races", response_model=List[RaceRecord])
async def list_races():
    # Newest first, ordered explicitly by the record timestamp.
    races = await Race.all().order_by("-date")
    return [to_record(r) for r in races]


@router.post("/races", response_model=RaceRecord, status_code=status.HTTP_201_CREATED)
async def create_race(req: SaveRaceRequest, runtime: Runtime = Depends(get_runtime)):
    session = runtime.store.get_session(req.session_id.strip().upper())
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    race = await save_race(session, req.name)
    return to_record(race)


@router.get("/races/{race_id}", response_model=RaceRecord)
async def get_race(race_id: uuid.UUID):
    race = await Race.get_or_none(id=race_id)
    if race is None:
        raise HTTPException(status_code=404, detail="Race not found")
    return to_record(race)
