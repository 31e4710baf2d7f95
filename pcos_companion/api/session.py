"""
Session API endpoints - Identity hand-off and logout.
"""

from fastapi import APIRouter, Depends, status

from .deps import get_companion
from ..models import Identity, Profile
from ..services import CompanionService

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/sign-in")
async def sign_in(
    identity: Identity,
    companion: CompanionService = Depends(get_companion)
) -> Profile:
    """Accept the identity provider's result; seeds the profile name once."""
    return await companion.sign_in(identity)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(companion: CompanionService = Depends(get_companion)) -> None:
    await companion.logout()
