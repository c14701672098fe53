import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.orm import Session

from farmhub.config import get_settings
from farmhub.database import get_db
from farmhub.rate_limit import limiter
from farmhub.routers import (
    audit_router, comments_router, crops_router, dashboard_router, farms_router,
    projects_router, tasks_router, transactions_router, weather_router,
)
from farmhub.schemas.reports import HealthResponse
from farmhub.services.scheduler import start_scheduler, stop_scheduler

settings = get_settings()
logger = logging.getLogger("farmhub")
logging.basicConfig(level=settings.log_level.upper())

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan for startup/shutdown events."""
    if settings.scheduler_enabled:
        start_scheduler()
    yield
    if settings.scheduler_enabled:
        stop_scheduler()


app = FastAPI(
    title="FarmHub API",
    description="Farm management and project tracking: farms, crops, tasks, finances, weather, projects and comments.",
    version=API_VERSION,
    lifespan=lifespan
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)


def _json(data: dict[str, Any]) -> str:
    return json.dumps(data, default=str)


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    req_id = request.headers.get("X-Request-ID", str(uuid4()))
    request.state.request_id = req_id

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = req_id
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
    finally:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        payload = {
            "request_id": req_id,
            "path": request.url.path,
            "method": request.method,
            "status": status_code,
            "duration_ms": duration_ms,
        }
        logger.info(_json(payload))


Instrumentator().instrument(app).expose(app, include_in_schema=False, should_gzip=True)

app.include_router(farms_router)
app.include_router(crops_router)
app.include_router(tasks_router)
app.include_router(transactions_router)
app.include_router(projects_router)
app.include_router(comments_router)
app.include_router(weather_router)
app.include_router(dashboard_router)
app.include_router(audit_router)


@app.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db)):
    db_ok = "ok"
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check database probe failed")
        db_ok = "error"

    if db_ok == "error":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=HealthResponse(status="degraded", db=db_ok).model_dump(),
        )
    return HealthResponse(status="ok", db=db_ok)


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": "FarmHub API",
        "version": API_VERSION,
        "docs": "/docs",
        "farm": ["/farms", "/crops", "/tasks", "/transactions", "/weather"],
        "projects": ["/projects", "/tasks", "/comments"],
        "dashboard": ["/dashboard/farm", "/dashboard/projects"],
    }
