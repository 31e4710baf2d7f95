"""
Chat API endpoints - The conversation transcript and AI replies.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from .deps import get_companion
from ..models import ChatMessage
from ..services import CompanionService

router = APIRouter(prefix="/chat", tags=["chat"])


class MessageRequest(BaseModel):
    content: str = Field(..., min_length=1)


@router.get("")
async def get_transcript(companion: CompanionService = Depends(get_companion)) -> List[ChatMessage]:
    return companion.chat_session.list()


@router.post("/start")
async def start_chat(companion: CompanionService = Depends(get_companion)) -> Optional[ChatMessage]:
    """Greet the user when the conversation is empty."""
    return await companion.start_chat()


@router.post("/message")
async def send_message(
    message: MessageRequest,
    companion: CompanionService = Depends(get_companion)
) -> ChatMessage:
    result = await companion.send_message(message.content.strip())
    if not result.ok:
        raise result.error
    return result.value


@router.post("/share/{item_id}")
async def share_analysis(
    item_id: str,
    companion: CompanionService = Depends(get_companion)
) -> ChatMessage:
    item = companion.history_log.get(item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Analysis not found")
    return await companion.share_analysis(item)


@router.get("/offer-extended-quiz")
async def offer_extended_quiz(companion: CompanionService = Depends(get_companion)) -> dict:
    return {"offer": companion.should_offer_extended_questionnaire()}


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_chat(companion: CompanionService = Depends(get_companion)) -> None:
    await companion.clear_chat()
