"""Admin REST API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.lw_admin.application.service import AdminService, check_admin_secret
from src.lw_common.database import get_db_session
from src.lw_common.response import ApiResponse, respond

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


async def require_admin(
    x_admin_secret: Annotated[str | None, Header()] = None,
) -> None:
    check_admin_secret(x_admin_secret)


@router.post("/reset", dependencies=[Depends(require_admin)])
async def reset_league(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    result = await _service.reset_league(db)
    return respond(request, result)
