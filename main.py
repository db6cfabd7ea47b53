# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Member Directory Service
========================
Stores organization members (employees and contractors) in MongoDB and
exposes CRUD over HTTP/JSON:

    GET    /api/members          all members
    GET    /api/members/{clid}   one member
    POST   /api/members          create (clid optional)
    PATCH  /api/members/{clid}   partial update, field by field
    DELETE /api/members/{clid}   delete one
    DELETE /api/members          delete all

Job-type rules:
    Employee   ─► role required, no duration
    Contractor ─► duration required, no role

Port: 8081
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from member_directory.controllers import member_controller, system_controller
from member_directory.core.config import settings
from member_directory.core.dependencies import get_member_repo
from member_directory.core.logging import get_logger
from member_directory.middleware import MetricsMiddleware, RequestIDMiddleware
from member_directory.repositories.base import RepositoryError

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Verify the store is reachable before serving; a failure stops the process."""
    repo = get_member_repo()
    try:
        repo.ping()
        repo.ensure_indexes()
    except RepositoryError:
        logger.critical("Cannot reach the member store (%s)", settings.STORE_BACKEND, exc_info=True)
        raise
    logger.info(
        "Member directory starting: store=%s, strict_updates=%s",
        settings.STORE_BACKEND,
        settings.STRICT_UPDATES,
    )
    yield
    logger.info("Member directory shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Member Directory Service",
    description="Employee and contractor records with job-type validation.",
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


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(member_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
