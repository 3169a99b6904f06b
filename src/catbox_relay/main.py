"""Catbox Relay – FastAPI application entry-point."""

from contextlib import asynccontextmanager
import logging
from collections.abc import AsyncIterator

import httpx
from fastapi import FastAPI

from src.catbox_relay.config import settings
from src.catbox_relay.errors import register_error_handlers
from src.catbox_relay.middleware import CatchAllExceptionMiddleware, CORSHeadersMiddleware
from src.catbox_relay.router import info, upload

# Configure logging from settings
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Lifespan: open the outbound client on startup, close it on shutdown
# ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("🚀 Starting %s …", settings.service_name)
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )
    yield
    logger.info("🛑 Shutting down – closing upstream client …")
    await app.state.http_client.aclose()


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
app = FastAPI(
    title="Catbox Relay API",
    description="Relay file uploads to catbox.moe and litterbox.",
    version="1.0.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

register_error_handlers(app)

# ── middleware (last added is outermost) ──
app.add_middleware(CatchAllExceptionMiddleware)
app.add_middleware(
    CORSHeadersMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.cors_headers_list,
)

logger.info("CORS configured with origins: %s", settings.cors_origins_list)

# ── register routers ──
app.include_router(info.router)
app.include_router(upload.router)
