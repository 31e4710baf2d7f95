"""Agents module - AI clients for food analysis and chat."""

from .base_agent import AgentResult, BaseAgent
from .food_analysis_agent import FoodAnalysisAgent
from .chat_agent import ChatAgent, CHAT_APOLOGY
from .normalization import normalize_analysis

__all__ = [
    'AgentResult',
    'BaseAgent',
    'FoodAnalysisAgent',
    'ChatAgent',
    'CHAT_APOLOGY',
    'normalize_analysis',
]
