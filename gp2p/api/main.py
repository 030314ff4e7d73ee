"""
gp2p.api.main — FastAPI application entry point
=================================================

Run with::

    uvicorn gp2p.api.main:app --reload --port 5000

or ``python -m gp2p.api``.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

load_dotenv()

from gp2p import __version__  # noqa: E402
from gp2p.api.deps import get_config, get_engine  # noqa: E402
from gp2p.api.routes.rewards import router as rewards_router  # noqa: E402
from gp2p.engine.errors import RewardError  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env with safe defaults.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — load config and build the engine.

    A malformed rate table raises here and aborts startup.
    """
    cfg = get_config()
    engine = get_engine()
    logger.info(
        "gp2p API started — platforms: %s, currency: %s",
        ", ".join(engine.rates.platforms),
        cfg.currency,
    )
    yield
    logger.info("gp2p API shutting down")


app = FastAPI(
    title="Get Paid to Play Rewards API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RewardError)
async def reward_error_handler(request: Request, exc: RewardError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


app.include_router(rewards_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
