import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from sentinel.config import Settings, get_settings
from sentinel.core.logging import setup_logging
from sentinel.database import create_schema
from sentinel.routers import (
    admin_router,
    alerts_router,
    assets_router,
    health_router,
    risks_router,
)
from sentinel.services.audit_service import get_audit_service

setup_logging()
settings: Settings = get_settings()

_AUDITED_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_schema()
    get_audit_service().log_system_event("Service Started", "{} started".format(settings.APP_NAME))
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.middleware("http")
async def audit_mutations(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    if request.method in _AUDITED_METHODS:
        duration_ms = round((time.perf_counter() - started) * 1000)
        # Same buffer the routes receive through Depends.
        audit = request.app.dependency_overrides.get(get_audit_service, get_audit_service)()
        audit.log_api_event(
            request.url.path,
            request.method,
            response.status_code,
            duration=duration_ms,
        )
    return response


app.include_router(health_router)
app.include_router(alerts_router)
app.include_router(risks_router)
app.include_router(assets_router)
app.include_router(admin_router)


@app.get("/")
def root():
    return RedirectResponse(url="/alerts/feed", status_code=302)


__all__ = ["app", "root"]
