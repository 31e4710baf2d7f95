"""
Profile Models - The user's self-reported health attributes and questionnaire flags.
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WeightGoal(str, Enum):
    MAINTAIN = "maintain"
    LOSE = "lose"
    GAIN = "gain"


class PeriodRegularity(str, Enum):
    REGULAR = "regular"
    IRREGULAR = "irregular"
    ABSENT = "absent"
    PAINFUL = "painful"  # heavy and painful, but on schedule


class StressLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class PcosProbability(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Measurement(BaseModel):
    """A body measurement. Both fields are required: nested values are replaced whole."""
    value: float
    unit: str


class ProfileBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Profile(ProfileBase):
    """The single mutable profile record of the current user."""
    name: str = ""
    age: Optional[int] = None  # 12-99, validated by the form layer
    symptoms: List[str] = Field(default_factory=list)
    insulin_resistant: Optional[bool] = None
    weight_goal: Optional[WeightGoal] = None
    dietary_preferences: List[str] = Field(default_factory=list)

    # Questionnaire answers
    period_regularity: Optional[PeriodRegularity] = None
    primary_goal: Optional[str] = None
    has_been_diagnosed: Optional[bool] = None
    height: Optional[Measurement] = None
    weight: Optional[Measurement] = None
    activity_level: Optional[str] = None
    mood: Optional[str] = None
    quiz_results: Dict[str, Any] = Field(default_factory=dict)

    # Extended questionnaire
    diagnosed_conditions: List[str] = Field(default_factory=list)
    family_history: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    trying_to_conceive: Optional[bool] = None
    stress_level: Optional[StressLevel] = None

    # Completion flags gate different features and are set independently
    completed_setup: bool = False
    completed_quiz: bool = False
    completed_extended_quiz: bool = False

    # Written only by the risk scoring step
    pcos_probability: Optional[PcosProbability] = None

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProfileUpdate(ProfileBase):
    """
    Partial profile - all fields optional.
    Only the fields explicitly set are merged onto the current profile.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: Optional[str] = None
    age: Optional[int] = None
    symptoms: Optional[List[str]] = None
    insulin_resistant: Optional[bool] = None
    weight_goal: Optional[WeightGoal] = None
    dietary_preferences: Optional[List[str]] = None
    period_regularity: Optional[PeriodRegularity] = None
    primary_goal: Optional[str] = None
    has_been_diagnosed: Optional[bool] = None
    height: Optional[Measurement] = None
    weight: Optional[Measurement] = None
    activity_level: Optional[str] = None
    mood: Optional[str] = None
    quiz_results: Optional[Dict[str, Any]] = None
    diagnosed_conditions: Optional[List[str]] = None
    family_history: Optional[List[str]] = None
    medications: Optional[List[str]] = None
    trying_to_conceive: Optional[bool] = None
    stress_level: Optional[StressLevel] = None
    completed_setup: Optional[bool] = None
    completed_quiz: Optional[bool] = None
    completed_extended_quiz: Optional[bool] = None
    pcos_probability: Optional[PcosProbability] = None

    def changes(self) -> Dict[str, Any]:
        """
        Explicitly provided fields, keyed by attribute name.

        An explicit None is kept for nullable profile fields (it clears them)
        and dropped for fields that cannot hold None (lists, flags, name).
        """
        result = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None and Profile.model_fields[name].default is not None:
                continue
            result[name] = value
        return result
