"""lw_settlement REST API — trigger a settlement pass on demand."""

from fastapi import APIRouter, Request

from src.lw_common.response import ApiResponse, respond
from src.lw_settlement.application.scheduler import run_settlement_once

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.post("/run")
async def run_settlement(request: Request) -> ApiResponse:
    report = await run_settlement_once()
    return respond(request, report.model_dump())
