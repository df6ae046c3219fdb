"""Sortboard API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SortboardError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Every board is closed on shutdown: no return timer outlives the app

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Produce board loaded before serving (local file); users board loaded in a
      background task so clients observe the loading state
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.routes import board_stream, boards, health
from app.config import get_settings
from app.infrastructure.observability import setup_logging
from app.services.board_registry import PRODUCE_BOARD, USERS_BOARD, build_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    registry = build_registry(settings)
    app.state.boards = registry

    await registry.get(PRODUCE_BOARD).load()
    users_task = asyncio.create_task(registry.get(USERS_BOARD).load())
    logger.info("Sortboard API started")
    yield
    logger.info("Sortboard API shutting down")
    users_task.cancel()
    with suppress(asyncio.CancelledError):
        await users_task
    registry.close_all()


app = FastAPI(
    title="Sortboard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(boards.router)
app.include_router(board_stream.router)

register_error_handlers(app)

# Mounted AFTER API routes so /api/v1/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
