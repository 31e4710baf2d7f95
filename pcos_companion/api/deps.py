"""
Request dependencies.
"""

from fastapi import Request

from ..services import CompanionService


def get_companion(request: Request) -> CompanionService:
    """The session's CompanionService, created by the app lifespan."""
    return request.app.state.companion
