"""lw_slip REST API — read and mutate a participant's bet slip."""

from fastapi import APIRouter, Query, Request

from src.lw_common.response import ApiResponse, respond
from src.lw_slip.application.schemas import AddLegRequest
from src.lw_slip.application.service import SlipApplicationService

router = APIRouter(prefix="/slip", tags=["slip"])

_service = SlipApplicationService()


@router.get("/{participant_id}")
async def get_slip(
    participant_id: str,
    request: Request,
    stake_cents: int | None = Query(None, gt=0, description="Preview potential return"),
) -> ApiResponse:
    data = await _service.get_slip(participant_id, stake_cents)
    return respond(request, data.model_dump())


@router.post("/{participant_id}/legs")
async def add_leg(participant_id: str, body: AddLegRequest, request: Request) -> ApiResponse:
    data = await _service.add_leg(participant_id, body)
    return respond(request, data.model_dump())


@router.delete("/{participant_id}/legs/{index}")
async def remove_leg(participant_id: str, index: int, request: Request) -> ApiResponse:
    data = await _service.remove_leg(participant_id, index)
    return respond(request, data.model_dump())


@router.delete("/{participant_id}")
async def clear_slip(participant_id: str, request: Request) -> ApiResponse:
    data = await _service.clear_slip(participant_id)
    return respond(request, data.model_dump())
