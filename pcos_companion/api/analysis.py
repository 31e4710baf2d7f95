"""
Analysis API endpoint - Analyze a food photo and record the result.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .deps import get_companion
from ..models import FoodAnalysisItem
from ..services import CompanionService

router = APIRouter(prefix="/analysis", tags=["analysis"])


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image: str = Field(..., min_length=1, description="Image URL or data URL (data:image/...;base64,...)")
    share_to_chat: bool = False


@router.post("", status_code=status.HTTP_201_CREATED)
async def analyze_food(
    request: AnalysisRequest,
    companion: CompanionService = Depends(get_companion)
) -> FoodAnalysisItem:
    """
    Analyze a food photo.

    Failures are raised as AIClientError and mapped by the app's error handler.
    """
    result = await companion.analyze_food(request.image)
    if not result.ok:
        raise result.error

    if request.share_to_chat:
        await companion.share_analysis(result.value)
    return result.value
