"""
Profile API endpoints - Read and update the profile and submit questionnaires.
"""

from fastapi import APIRouter, Depends

from .deps import get_companion
from ..models import Profile, ProfileUpdate
from ..services import CompanionService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(companion: CompanionService = Depends(get_companion)) -> Profile:
    return companion.profile


@router.patch("")
async def update_profile(
    changes: ProfileUpdate,
    companion: CompanionService = Depends(get_companion)
) -> Profile:
    """Merge the provided fields onto the profile."""
    return await companion.profile_store.update(changes)


@router.get("/complete")
async def profile_complete(companion: CompanionService = Depends(get_companion)) -> dict:
    return {"complete": companion.profile_store.is_complete()}


@router.post("/setup")
async def complete_setup(
    answers: ProfileUpdate,
    companion: CompanionService = Depends(get_companion)
) -> Profile:
    return await companion.complete_setup(answers)


@router.post("/quiz")
async def complete_quiz(
    answers: ProfileUpdate,
    companion: CompanionService = Depends(get_companion)
) -> Profile:
    """Store the quiz answers and the resulting PCOS likelihood."""
    return await companion.complete_questionnaire(answers)


@router.post("/extended-quiz")
async def complete_extended_quiz(
    answers: ProfileUpdate,
    companion: CompanionService = Depends(get_companion)
) -> Profile:
    return await companion.complete_extended_questionnaire(answers)
