import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from protracker.api.dev import router as dev_router
from protracker.api.edges import router as edges_router
from protracker.api.health import router as health_router
from protracker.api.meta import router as meta_router
from protracker.api.props import router as props_router
from protracker.api.stats import router as stats_router
from protracker.core.config import settings
from protracker.core.events import set_log_path

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
if settings.event_log_path:
    set_log_path(settings.event_log_path)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(meta_router)
app.include_router(props_router)
app.include_router(stats_router)
app.include_router(edges_router)
app.include_router(dev_router)


@app.get("/", tags=["root"])
def root() -> dict:
    return {"message": "ok"}
