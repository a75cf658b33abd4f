"""TextCards API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CardGenError → {"message", "code"} responses
    - CORS configured from settings (not hardcoded)
    - Model client initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Missing API key is logged at startup but does not abort: requests surface
      AUTH_ERROR and /health/ready reports not_ready
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import generate, health
from app.config import get_settings
from app.infrastructure.anthropic_client import init_client
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    client = init_client(settings)
    if not client.configured:
        logger.warning("ANTHROPIC_API_KEY is not set; generation will fail with AUTH_ERROR")
    logger.info("TextCards API started")
    yield
    logger.info("TextCards API shutting down")


app = FastAPI(
    title="TextCards API", version="0.1.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(generate.router)

register_error_handlers(app)
