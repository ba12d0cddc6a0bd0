"""
ETAPilot FastAPI Service

HTTP front end for the delivery estimation engine. Every request runs
the engine from scratch; nothing but the global settings is kept between
requests.

Endpoints:
    GET  /health                  - Liveness probe
    GET  /holidays                - Supported holiday countries
    GET  /holidays/{country}/{year} - National holidays
    POST /config/validate         - Structural config validation
    POST /config/migrate          - v1 -> v2 migration
    POST /preview                 - Delivery messaging for a product
"""

import json
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import load_settings
from ..exceptions import (
    ConfigValidationError,
    ConfigVersionError,
    ETAPilotError,
    ProfileNotFoundError,
    RuleNotFoundError,
    SettingsValidationError,
)
from ..models import GlobalSettings
from .routes import config, holidays, preview
from .schemas.responses import HealthResponse

# =============================================================================
# Configuration
# =============================================================================

ETA_LOG_LEVEL = os.getenv("ETA_LOG_LEVEL", "INFO")
ETA_DEFAULT_TIMEZONE = os.getenv("ETA_DEFAULT_TIMEZONE", "")
ETA_SETTINGS_PATH = os.getenv("ETA_SETTINGS_PATH", "")
ETA_DOCS_ENABLED = os.getenv("ETA_DOCS_ENABLED", "true").lower() == "true"

# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Add extra fields if present
        if hasattr(record, "request_id"):
            log_entry["request_id"] = record.request_id
        if hasattr(record, "rule_id"):
            log_entry["rule_id"] = record.rule_id
        if hasattr(record, "profile_id"):
            log_entry["profile_id"] = record.profile_id
        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


# Configure logging
logger = logging.getLogger("etapilot")
logger.setLevel(getattr(logging, ETA_LOG_LEVEL.upper(), logging.INFO))
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

settings_source = "defaults"


def load_service_settings() -> GlobalSettings:
    """
    Global settings used when a request does not carry its own.

    Read from ETA_SETTINGS_PATH when set; a file that fails to load is
    logged and the defaults are used instead.
    """
    global settings_source
    if not ETA_SETTINGS_PATH:
        settings_source = "defaults"
        return GlobalSettings()
    try:
        settings = load_settings(ETA_SETTINGS_PATH)
    except ETAPilotError as e:
        logger.error(f"Failed to load settings from {ETA_SETTINGS_PATH}: {e}")
        settings_source = "defaults"
        return GlobalSettings()
    settings_source = ETA_SETTINGS_PATH
    return settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load global settings on startup."""
    settings = load_service_settings()
    preview.set_defaults(settings, ETA_DEFAULT_TIMEZONE)
    logger.info(f"ETAPilot {__version__} started (settings: {settings_source})")

    yield

    logger.info("Shutting down")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="ETAPilot",
    description="Delivery date estimation and rule resolution",
    version=__version__,
    docs_url="/docs" if ETA_DOCS_ENABLED else None,
    redoc_url="/redoc" if ETA_DOCS_ENABLED else None,
    openapi_url="/openapi.json" if ETA_DOCS_ENABLED else None,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(holidays.router)
app.include_router(config.router)
app.include_router(preview.router)

# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id
    request.state.start_time = time.time()

    response = await call_next(request)

    # Add request ID to response headers
    response.headers["X-Request-ID"] = request_id

    return response

# =============================================================================
# Error Handling
# =============================================================================

_VALIDATION_ERRORS = (ConfigValidationError, ConfigVersionError, SettingsValidationError)
_NOT_FOUND_ERRORS = (RuleNotFoundError, ProfileNotFoundError)


@app.exception_handler(ETAPilotError)
async def etapilot_error_handler(request: Request, exc: ETAPilotError):
    """Map domain errors to structured JSON error bodies."""
    if isinstance(exc, _VALIDATION_ERRORS):
        status_code = 422
    elif isinstance(exc, _NOT_FOUND_ERRORS):
        status_code = 404
    else:
        status_code = 400

    request_id = getattr(request.state, "request_id", "unknown")
    logger.warning(f"{exc.code}: {exc.message}", extra={"request_id": request_id})
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.message,
            "code": exc.code,
            "details": exc.details or None,
            "request_id": request_id,
        },
    )

# =============================================================================
# Health Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Liveness probe - checks if process is alive."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        settings_source=settings_source,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
