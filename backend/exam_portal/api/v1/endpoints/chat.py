from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.database import get_db
from exam_portal.core.security import TokenClaims
from exam_portal.modules.auth.dependencies import get_current_claims
from exam_portal.schemas.chat import ChatEntryResponse, ChatReply, ChatRequest
from exam_portal.services.chat_service import ChatService


router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post("", response_model=ChatReply)
async def chat(
    payload: ChatRequest,
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """Ask the FAQ assistant a question"""
    response = await ChatService(db).chat(claims.user_id, payload.message)
    return ChatReply(response=response)


@router.get("/history", response_model=List[ChatEntryResponse])
async def chat_history(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """Caller's last 50 exchanges, newest first"""
    return await ChatService(db).history(claims.user_id)
