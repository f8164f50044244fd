from __future__ import annotations

from fastapi import APIRouter

from protracker.db.store import get_store
from protracker.services.leaders_cache import leaders_cache
from protracker.services.slate import leaders, store_status, warm_leaders

router = APIRouter(prefix="/api/nba/stats", tags=["stats"])


@router.get("/status")
def get_status() -> dict:
    return {"ok": True, **store_status(get_store(), leaders_cache)}


@router.get("/leaders")
def get_leaders() -> dict:
    return {"ok": True, **leaders(get_store(), leaders_cache).to_dict()}


@router.post("/warm")
def post_warm() -> dict:
    return {"ok": True, **warm_leaders(get_store(), leaders_cache)}
