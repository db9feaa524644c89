"""Earthquake feed API - FastAPI rendering adapter.

Serves the formatted earthquake rows as JSON. Each request runs one load
with the configured filter, optionally overridden by query parameters.

Run locally with:
    uvicorn quakefeed.api:app --reload
"""

import logging
import os
from dataclasses import replace

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from quakefeed.core.config import Config, resolve_timezone
from quakefeed.orchestrator import LoadStatus, Orchestrator
from quakefeed.shell.config_loader import load_config


log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="quakefeed API",
    description="Formatted USGS earthquake feed",
    version="1.0.0",
)

# ===== Response Models =====

class RowOut(BaseModel):
    magnitude: str
    magnitude_bucket: str
    magnitude_color: str
    primary_location: str
    location_offset: str
    date: str
    time: str
    url: str


class FeedOut(BaseModel):
    status: str
    message: str | None = None
    error: str | None = None
    count: int
    rows: list[RowOut]


_config: Config | None = None


def _get_config() -> Config:
    """Load configuration once per process."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/earthquakes", response_model=FeedOut)
def get_earthquakes(
    orderby: str | None = Query(None, description="Sort order, e.g. time or magnitude"),
    minmag: str | None = Query(None, description="Minimum magnitude"),
    maxmag: str | None = Query(None, description="Maximum magnitude"),
    starttime: str | None = Query(None, description="Start date, e.g. 2024-01-01"),
    endtime: str | None = Query(None, description="End date"),
    tz: str | None = Query(None, description="IANA timezone for dates and times"),
) -> dict:
    """Load the feed and return the formatted rows."""
    config = _get_config()

    overrides = {
        "order_by": orderby,
        "min_magnitude": minmag,
        "max_magnitude": maxmag,
        "start_time": starttime,
        "end_time": endtime,
    }
    query = replace(
        config.query,
        **{key: value for key, value in overrides.items() if value is not None},
    )

    display_timezone = tz or config.display_timezone
    try:
        resolve_timezone(display_timezone)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    request_config = replace(config, query=query, display_timezone=display_timezone)
    orchestrator = Orchestrator(request_config)
    try:
        state = orchestrator.load().result()
    finally:
        orchestrator.shutdown()

    if state.status is LoadStatus.NO_CONNECTION:
        raise HTTPException(status_code=503, detail=state.message)
    if state.status is LoadStatus.FAILED:
        logger.error("Feed load failed: %s", state.error)
        raise HTTPException(status_code=502, detail=state.message)

    return state.to_dict()
