from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from protracker.core.config import settings
from protracker.core.errors import InvalidParameterError
from protracker.db.store import get_store
from protracker.services.simulation import simulate_line_move

router = APIRouter(prefix="/api/dev", tags=["dev"])


class SimulateLineRequest(BaseModel):
    source: str
    date: str
    statType: str
    playerId: str | None = None
    playerName: str | None = None
    newLine: float | None = None
    delta: float | None = None


@router.post("/simulate-line")
def simulate_line(req: SimulateLineRequest) -> dict:
    if not settings.dev_routes_enabled:
        raise HTTPException(status_code=404, detail="Not found")
    try:
        result = simulate_line_move(
            get_store(),
            source=req.source,
            date=req.date,
            stat_type=req.statType,
            player_id=req.playerId,
            player_name=req.playerName,
            new_line=req.newLine,
            delta=req.delta,
        )
    except InvalidParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"ok": True, **result.to_dict()}
