from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..schemas import SessionSnapshot
from ..state import Runtime, get_runtime

router = APIRouter(prefix="", tags=["sessions"])


@router.get("/sessions/{session_id}", response_model=SessionSnapshot)
async def get_session(session_id: str, runtime: Runtime = Depends(get_runtime)):
    session = runtime.store.get_session(session_id.strip().upper())
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session.snapshot()
