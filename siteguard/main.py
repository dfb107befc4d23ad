"""
siteguard/main.py — FastAPI application entry point
Includes: lifespan management, CORS, request throttling, security headers,
          unhandled-error logging, startup settings check, ping endpoint.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from siteguard.config import get_settings
from siteguard.core import logging as app_logging
from siteguard.core.logging import setup_logging
from siteguard.core.rate_limiter import RATE_LIMITS, limiter
from siteguard.routers import api

settings = get_settings()

VERSION = "1.0.0"


# ──────────────────────────────────────────────────────────────────────────────
# Application Lifespan
# ──────────────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: structured logging, settings check. Shutdown: log only."""
    setup_logging(settings.log_level)
    logger.info("SiteGuard starting up...")

    _validate_env()

    logger.info("Startup complete.")
    yield
    # The auth attempt ledger is in-memory; a restart clears it.
    logger.info("Shutting down SiteGuard.")


def _validate_env() -> None:
    """Warn loudly when the API key is missing: /api/auth/* answers 503 until set."""
    if not settings.api_key or settings.api_key in ("change-me-immediately", "your-api-key-here"):
        logger.critical("Missing or placeholder env var: API_KEY")
        logger.warning("App will start but /api/auth/* endpoints are unavailable until it is set.")


# ──────────────────────────────────────────────────────────────────────────────
# FastAPI App
# ──────────────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="SiteGuard",
    description=(
        "Input sanitization, validation and login attempt limiting "
        "for the site-activity dashboard."
    ),
    version=VERSION,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url=None,
    lifespan=lifespan,
)

# ── Request throttling — fastapi/slowapi ──────────────────────────────────────
app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    lambda req, exc: JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded. Slow down."},
    ),
)
app.add_middleware(SlowAPIMiddleware)

# ── Unhandled errors — logged with context, generic 500 body ─────────────────
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    app_logging.log_error(
        "api",
        f"{request.method} {request.url.path}",
        exc,
        context={"client": request.client.host if request.client else None},
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error."})

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# ── Security headers middleware ───────────────────────────────────────────────
@app.middleware("http")
async def add_security_headers(request: Request, call_next) -> Response:
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-XSS-Protection"] = "1; mode=block"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
    return response


# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(api.router, prefix="/api", tags=["api"])


@app.get("/api/ping", tags=["health"])
@limiter.limit(RATE_LIMITS["ping"])
async def ping(request: Request):
    """Liveness check. Touches no state."""
    return {"status": "ok", "version": VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("siteguard.main:app", host="0.0.0.0", port=settings.port)
