"""lw_odds REST API — the current week's priced board."""

from fastapi import APIRouter, Request

from src.lw_common.response import ApiResponse, respond
from src.lw_odds.application.service import OddsApplicationService

router = APIRouter(prefix="/odds", tags=["odds"])

_service = OddsApplicationService()


@router.get("/board")
async def get_board(request: Request) -> ApiResponse:
    board = await _service.get_board()
    return respond(request, board.model_dump())
