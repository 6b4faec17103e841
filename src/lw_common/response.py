"""Response envelope shared by every route.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "<UTC ISO-8601>", "request_id": "req_..."}

A non-zero code is an AppError code and always comes with data = null.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from pydantic import BaseModel, Field


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=_utc_timestamp)
    request_id: str = Field(default_factory=_new_request_id)


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(data=data)


def error_response(code: int, message: str) -> ApiResponse:
    return ApiResponse(code=code, message=message)


def respond(request: Request, data: Any = None) -> ApiResponse:
    """Wrap data, reusing the id RequestLogMiddleware put on request.state."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        return success_response(data)
    return ApiResponse(data=data, request_id=request_id)
