"""
Strike Data Platform API Server

FastAPI server for triggering the stat ingestion pipelines via HTTP.
Pipeline routes require a bearer token; /health is open.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8001

Environment Variables:
    PIPELINE_API_TOKEN - Required secret token for the pipeline routes
    DATABASE_URL - peewee db_url (postgresql://, postgres+pool://, sqlite:///)
    SEASON - Season imported by every pipeline
"""

from contextlib import asynccontextmanager
from datetime import datetime

import pytz
from fastapi import FastAPI
from pydantic import BaseModel

from api.v1 import pipelines
from core.correlation_middleware import CorrelationMiddleware
from core.db_middleware import DatabaseMiddleware
from core.logging import get_logger, setup_logging
from core.settings import settings
from db.base import close_db, init_db


class HealthResponse(BaseModel):
    status: str
    timestamp: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        log_level=settings.log_level,
        json_format=settings.log_format == "json",
        service_name=settings.service_name,
        season=settings.season,
    )
    log = get_logger()
    log.info("api_starting")

    init_db()

    yield

    close_db()
    log.info("api_stopped")


app = FastAPI(
    title="Strike Data Platform",
    description="API for triggering MLB stat ingestion pipelines",
    version="1.0.0",
    lifespan=lifespan,
)

# Middlewares (first added = innermost)
app.add_middleware(DatabaseMiddleware)
app.add_middleware(CorrelationMiddleware)

app.include_router(pipelines.router, prefix="/v1")


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint (no auth required)."""
    return HealthResponse(status="healthy", timestamp=datetime.now(pytz.utc).isoformat())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
