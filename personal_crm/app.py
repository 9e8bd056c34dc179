"""FastAPI application factory for the personal CRM activity API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .services.errors import CRMError, ValidationFailed

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level.upper())
    # Auto-create tables for SQLite outside production
    if "sqlite" in settings.database_url and not settings.is_production:
        from .database import engine
        from .models import Base
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield


app = FastAPI(title=settings.app_title, lifespan=lifespan)


@app.exception_handler(CRMError)
async def crm_error_handler(request: Request, exc: CRMError) -> JSONResponse:
    log.debug("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        # Drop the leading "query"/"path"/"body" marker.
        loc = [str(part) for part in err.get("loc", ())][1:]
        errors.setdefault(".".join(loc) or "body", []).append(err.get("msg", "Invalid value"))
    return await crm_error_handler(request, ValidationFailed(errors))


# Import and register routers
from .routers import activities, health, journal  # noqa: E402

app.include_router(activities.router)
app.include_router(journal.router)
app.include_router(health.router)
