# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Reviewer Assignment Service
===========================
Tracks pull requests, their authors, reviewer teams, and reviewer
assignments. New pull requests get up to two active reviewers from the
author's team; a reviewer can be swapped for the next eligible member of
their own team while the pull request is open.

Enforces a one-way status state-machine:
    OPEN ─► MERGED  (merge is idempotent)

Port: 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reviewer_service.controllers import (
    pull_request_controller,
    system_controller,
    team_controller,
    user_controller,
)
from reviewer_service.core import dependencies
from reviewer_service.core.config import settings
from reviewer_service.core.errors import NotFound, ServiceError, StatsUnavailable
from reviewer_service.core.logging import get_logger
from reviewer_service.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    logger.info("Starting %s v%s storage=%s",
                settings.SERVICE_NAME, settings.SERVICE_VERSION, settings.STORAGE_BACKEND)
    yield
    dependencies.shutdown()
    logger.info("Shutting down, connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Reviewer Assignment Service",
    description="Assigns and reassigns pull request reviewers within teams.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    request_id = getattr(request.state, "request_id", None)
    if isinstance(exc, StatsUnavailable):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc,
                     extra={"request_id": request_id})
    elif isinstance(exc, NotFound):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc,
                    extra={"request_id": request_id})
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc,
                       extra={"request_id": request_id})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL", "message": "internal error"}},
    )


app.include_router(system_controller.router)
app.include_router(team_controller.router)
app.include_router(user_controller.router)
app.include_router(pull_request_controller.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
