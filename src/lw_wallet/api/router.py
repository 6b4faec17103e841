"""lw_wallet REST API — sessions, wallets, wagers and league activity."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.lw_common.database import get_db_session
from src.lw_common.response import ApiResponse, respond
from src.lw_settlement.application.scheduler import run_settlement_in_background
from src.lw_wallet.application.schemas import PlaceWagerRequest, SessionRequest
from src.lw_wallet.application.service import WalletApplicationService

router = APIRouter(tags=["wallet"])

_service = WalletApplicationService()


@router.post("/session")
async def start_session(
    body: SessionRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.start_session(db, body.username)
    background_tasks.add_task(run_settlement_in_background)
    return respond(request, data.model_dump())


@router.get("/wallets/{participant_id}")
async def get_wallet(
    participant_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_wallet(db, participant_id)
    return respond(request, data.model_dump())


@router.get("/wallets/{participant_id}/wagers")
async def list_wagers(
    participant_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    limit: int = Query(50, ge=1, le=200, description="Most recent wagers first"),
) -> ApiResponse:
    data = await _service.list_wagers(db, participant_id, limit)
    return respond(request, data.model_dump())


@router.post("/wallets/{participant_id}/wagers")
async def place_wager(
    participant_id: str,
    body: PlaceWagerRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.place_wager(db, participant_id, body.stake_cents)
    return respond(request, data.model_dump())


@router.get("/wallets/{participant_id}/ledger")
async def list_ledger(
    participant_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = await _service.list_ledger(db, participant_id, cursor, limit)
    return respond(request, data.model_dump())


@router.get("/leaderboard")
async def leaderboard(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.leaderboard(db)
    return respond(request, data.model_dump())


@router.get("/wagers/recent")
async def recent_wagers(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.recent_activity(db)
    return respond(request, data.model_dump())
