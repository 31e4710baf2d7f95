"""Models module."""

from .profile import (
    Profile, ProfileUpdate, Measurement, WeightGoal, PeriodRegularity,
    StressLevel, PcosProbability,
)
from .food import (
    AnalysisResult, FoodAnalysisItem, NutritionalInfo, GlycemicLoad,
    InflammatoryScore, ALTERNATIVES_CUTOFF,
)
from .chat import ChatMessage, ChatRole
from .identity import Identity

__all__ = [
    'Profile', 'ProfileUpdate', 'Measurement', 'WeightGoal', 'PeriodRegularity',
    'StressLevel', 'PcosProbability',
    'AnalysisResult', 'FoodAnalysisItem', 'NutritionalInfo', 'GlycemicLoad',
    'InflammatoryScore', 'ALTERNATIVES_CUTOFF',
    'ChatMessage', 'ChatRole', 'Identity',
]
