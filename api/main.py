#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - REST API for Book Forge.

Thin orchestration shell: app creation, middleware, router includes,
exception handlers and lifespan.

Usage:
    uvicorn api.main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file (RATE_LIMIT_* overrides, REDIS_URL)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from config.logging_config import get_logger
from config.settings import settings

logger = get_logger(__name__)

from api.deps import close_provider_manager, get_provider_manager
from api.rate_limiter import limiter, rate_limit_exceeded_handler
from api.routes.dashboard import router as dashboard_router
from api.routes.generation import router as generation_router
from api.routes.health import router as health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    manager = get_provider_manager()
    logger.info("%s v%s starting (%s)", settings.app_name, settings.app_version, settings.environment)
    logger.info("Failover chain: %s", " -> ".join(manager.failover_chain))
    for status in manager.get_provider_status():
        if not status["configured"]:
            logger.warning("Provider %s has no API key configured", status["name"])
    yield
    logger.info("Shutting down gracefully")
    await close_provider_manager()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=f"{settings.app_name} API",
    description="Multi-provider AI content and book generation with automatic failover",
    version=settings.app_version,
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# CORS middleware: origins from settings (env var) or dev defaults
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Security headers middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": [
                {"loc": list(err.get("loc", [])), "msg": err.get("msg", "")}
                for err in exc.errors()
            ],
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not found",
                "message": f"Cannot {request.method} {request.url.path}",
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Never leak a stack trace; hide the message outside development."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "Something went wrong" if settings.is_production else str(exc),
        },
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(dashboard_router)
app.include_router(health_router)
app.include_router(generation_router)


# For running with python -m
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000)
