"""Liveness, heartbeat and metrics endpoints."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from restdemo.api.dependencies import get_sessions
from restdemo.core.config import settings
from restdemo.orchestration.sessions import OnlineSessions
from restdemo.utils.monitoring import render_metrics

logger = logging.getLogger("restdemo.api.system")

router = APIRouter(tags=["system"])

SESSION_COOKIE = "session_id"


class HeartbeatResponse(BaseModel):
    status: str = "alive"
    timestamp: str
    online_user_count: int


@router.get("/", response_class=HTMLResponse)
async def root() -> str:
    return "<h1>Hello, World!</h1>"


@router.get("/heartbeat", response_model=HeartbeatResponse)
async def heartbeat(
    response: Response,
    session_id: Optional[str] = Cookie(default=None),
    sessions: OnlineSessions = Depends(get_sessions),
) -> HeartbeatResponse:
    """Report liveness and count clients seen recently.

    Clients are told apart by the ``session_id`` cookie, which is (re)issued
    whenever the request lacks one the server still remembers.
    """

    effective_id, issued = sessions.touch(session_id)
    if issued:
        response.set_cookie(SESSION_COOKIE, effective_id, httponly=True, samesite="lax")
    return HeartbeatResponse(
        timestamp=datetime.now().astimezone().isoformat(),
        online_user_count=sessions.online_count,
    )


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    if not settings.ENABLE_METRICS:
        return Response(status_code=404)
    body, content_type = render_metrics()
    return Response(content=body, media_type=content_type)
