"""API module."""

from .profile import router as profile_router
from .history import router as history_router
from .analysis import router as analysis_router
from .chat import router as chat_router
from .session import router as session_router
from .errors import ai_client_error_handler

__all__ = [
    'profile_router', 'history_router', 'analysis_router', 'chat_router',
    'session_router', 'ai_client_error_handler',
]
