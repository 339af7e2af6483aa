"""ResumeHub — FastAPI Application Entry Point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from resumehub import models  # noqa: F401  (registers tables on Base.metadata)
from resumehub.config import settings
from resumehub.database import engine, Base
from resumehub.errors import DataAccessError
from resumehub.middleware.rate_limit import limiter
from resumehub.routers import analytics, profile, resumes, shared, templates

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("resumehub")

# ── CORS origins from env (supports dev localhost + production domain) ──────
_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app = FastAPI(
    title="ResumeHub",
    description="Resume persistence, versioning, and sharing API.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(DataAccessError)
async def data_access_error_handler(request: Request, exc: DataAccessError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(profile.router)
app.include_router(resumes.router)
app.include_router(shared.router)
app.include_router(templates.router)
app.include_router(analytics.router)


@app.on_event("startup")
def on_startup():
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("ResumeHub started (database: %s)", engine.url.render_as_string(hide_password=True))


@app.get("/")
def root():
    return {
        "name": "ResumeHub API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "ok"}
