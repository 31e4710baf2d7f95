"""Core module - the profile, history and chat stores plus risk scoring."""

from .profile_store import ProfileStore
from .history_log import HistoryLog
from .chat_session import ChatSession
from .risk_scoring import risk_score, classify_pcos_probability

__all__ = ['ProfileStore', 'HistoryLog', 'ChatSession', 'risk_score', 'classify_pcos_probability']
