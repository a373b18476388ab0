# backend/lapor_sarpras/main.py

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lapor_sarpras import models  # noqa: F401  (registers every table)
from lapor_sarpras.api.admin_routes import router as admin_router
from lapor_sarpras.api.auth_routes import router as auth_router
from lapor_sarpras.api.laporan_routes import router as laporan_router
from lapor_sarpras.api.sarpras_routes import router as sarpras_router
from lapor_sarpras.core.config import settings
from lapor_sarpras.core.database import Base, SessionLocal, engine
from lapor_sarpras.core.exceptions import Internal, LaporError
from lapor_sarpras.core.logging_config import setup_logging
from lapor_sarpras.core.seed import seed_users_if_empty
from lapor_sarpras.services.users import purge_expired_tokens

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if settings.seed_demo_users:
            seed_users_if_empty(db)
        purged = purge_expired_tokens(db)
        if purged:
            logger.info("Purged %d expired revoked tokens", purged)
    finally:
        db.close()

    logger.info("Lapor Sarpras API started (env=%s)", settings.app_env)
    yield


app = FastAPI(title="Lapor Sarpras API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method, request.url.path, response.status_code, elapsed_ms,
    )
    return response


# ---------- ERROR ENVELOPES ----------

def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


@app.exception_handler(LaporError)
async def lapor_error_handler(request: Request, exc: LaporError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _error(exc.status_code, exc.message, headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid input")
    return _error(400, f"{field}: {message}" if field else message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(Internal.status_code, Internal.default_message)


# ---------- ROUTES ----------

app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(laporan_router, prefix="/api/laporan", tags=["laporan"])
app.include_router(sarpras_router, prefix="/api/sarpras", tags=["sarpras"])
app.include_router(admin_router, prefix="/api/admin", tags=["admin"])


@app.get("/health")
def health():
    return {"success": True, "data": {"status": "ok"}}
