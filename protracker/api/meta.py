from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute

from protracker.db.store import get_store
from protracker.modeling.time_utils import slate_today
from protracker.services.slate import active_date

router = APIRouter(prefix="/api/pt", tags=["meta"])


def _base_url(request: Request) -> str:
    proto = request.headers.get("x-forwarded-proto")
    scheme = proto.split(",")[0].strip() if proto else request.url.scheme
    host = request.headers.get("x-forwarded-host") or request.headers.get("host") or request.url.netloc
    return f"{scheme or 'http'}://{host}"


@router.get("/quick-links")
def quick_links(request: Request) -> dict:
    today = slate_today()
    resolved = active_date(get_store(), today=today)["activeDate"]
    base = _base_url(request)
    return {
        "activeDate": resolved,
        "todayET": today,
        "links": {
            "health": f"{base}/api/health",
            "routes": f"{base}/api/pt/routes",
            "dates": f"{base}/api/props/dates",
            "activeDate": f"{base}/api/props/active-date",
            "sgoPropsForDate": f"{base}/api/odds/sgo/props-for-date?date={resolved}&limit=50",
            "lineMoves": f"{base}/api/props/line-moves?date={resolved}",
            "status": f"{base}/api/nba/stats/status",
            "leaders": f"{base}/api/nba/stats/leaders",
            "warmLeaders": f"{base}/api/nba/stats/warm",
            "edgesTiered": f"{base}/api/nba/edges-today-tiered",
        },
    }


@router.get("/routes")
def list_routes(request: Request) -> dict:
    routes = [
        {"method": method, "path": route.path}
        for route in request.app.routes
        if isinstance(route, APIRoute)
        for method in sorted(route.methods or ())
    ]
    routes.sort(key=lambda item: (item["path"], item["method"]))
    return {"routes": routes}
