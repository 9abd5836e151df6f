# stall_pos/api/v1/routes_session.py
from fastapi import APIRouter, Depends, Response

from stall_pos.api.deps import get_current_session, get_sessions
from stall_pos.domain.session.schemas import OperatorSession
from stall_pos.domain.session.service import SessionRegistry


router = APIRouter(prefix="/api/v1/session", tags=["session"])


@router.get("", response_model=OperatorSession)
async def current_session_endpoint(
    session: OperatorSession = Depends(get_current_session),
):
    return session


@router.delete("", status_code=204)
async def sign_out_endpoint(
    session: OperatorSession = Depends(get_current_session),
    sessions: SessionRegistry = Depends(get_sessions),
):
    sessions.invalidate(session.user_id)
    return Response(status_code=204)
