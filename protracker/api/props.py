from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from protracker.core.errors import InvalidParameterError
from protracker.db.store import get_store
from protracker.services.slate import active_date, archive_date, known_dates, line_moves, props_for_date

router = APIRouter(prefix="/api", tags=["props"])


@router.get("/props/dates")
def get_dates() -> dict:
    return {"dates": known_dates(get_store())}


@router.get("/props/active-date")
def get_active_date() -> dict:
    return active_date(get_store())


@router.get("/odds/{source}/props-for-date")
def get_props_for_date(
    source: str,
    date: str = Query("", description="Slate date YYYY-MM-DD"),
    limit: str = Query("50"),
) -> dict:
    try:
        result = props_for_date(get_store(), source, date, limit=limit)
    except InvalidParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, **result}


@router.post("/props/archive")
def post_archive(date: str | None = Query(None, description="Slate date YYYY-MM-DD; defaults to the active date")) -> dict:
    try:
        result = archive_date(get_store(), date)
    except InvalidParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, **result}


@router.get("/props/line-moves")
def get_line_moves(
    date: str | None = Query(None, description="Slate date YYYY-MM-DD; defaults to the active date"),
    source: str = Query("all"),
    limit: str | None = Query(None),
) -> dict:
    try:
        report = line_moves(get_store(), date=date, source=source, limit=limit)
    except InvalidParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, **report.to_dict()}
