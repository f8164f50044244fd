from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from protracker.core.errors import InvalidParameterError
from protracker.db.store import get_store
from protracker.services.slate import tiered_edges

router = APIRouter(prefix="/api/nba", tags=["edges"])


@router.get("/edges-today-tiered")
def get_tiered_edges(
    date: str | None = Query(None, description="Slate date YYYY-MM-DD; defaults to the active date"),
    min_edge: str | None = Query(None, alias="minEdge"),
    games: str | None = Query(None, description="Rolling window size, clamped to [1, MAX_WINDOW]"),
    mode: str | None = Query(None, description="flat or weighted"),
) -> dict:
    try:
        report = tiered_edges(get_store(), date=date, min_edge=min_edge, games=games, mode=mode)
    except InvalidParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, **report.to_dict()}
