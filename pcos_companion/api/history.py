"""
History API endpoints - Past food analyses, newest first.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from .deps import get_companion
from ..models import FoodAnalysisItem
from ..services import CompanionService

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
async def list_history(companion: CompanionService = Depends(get_companion)) -> List[FoodAnalysisItem]:
    return companion.history_log.list()


@router.get("/{item_id}")
async def get_history_item(
    item_id: str,
    companion: CompanionService = Depends(get_companion)
) -> FoodAnalysisItem:
    item = companion.history_log.get(item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Analysis not found")
    return item
