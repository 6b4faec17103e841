"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.lw_admin.api.router import router as admin_router
from src.lw_common.database import engine, ping_database
from src.lw_common.errors import AppError
from src.lw_common.logging_config import configure_logging
from src.lw_common.redis_client import close_redis, ping_redis
from src.lw_common.response import error_response
from src.lw_gateway.middleware.request_log import RequestLogMiddleware
from src.lw_league.infrastructure.sleeper_client import close_provider
from src.lw_odds.api.router import router as odds_router
from src.lw_settlement.api.router import router as settlement_router
from src.lw_settlement.application.scheduler import SettlementScheduler
from src.lw_slip.api.router import router as slip_router
from src.lw_wallet.api.router import router as wallet_router

logger = configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis, start settlement loop. Shutdown: stop and dispose."""
    await ping_database()
    await ping_redis()
    scheduler = SettlementScheduler()
    if settings.SETTLEMENT_ENABLED:
        scheduler.start()
    logger.info("%s started for league %s", settings.APP_NAME, settings.LEAGUE_ID)
    yield
    await scheduler.stop()
    await close_provider()
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(wallet_router, prefix="/api/v1")
app.include_router(odds_router, prefix="/api/v1")
app.include_router(slip_router, prefix="/api/v1")
app.include_router(settlement_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
