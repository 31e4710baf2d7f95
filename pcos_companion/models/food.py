"""
Food Analysis Models - Structured results of a food image analysis.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# At or above this compatibility score a food needs no alternatives
ALTERNATIVES_CUTOFF = 80

# The food name the analysis prompt asks for when nothing is recognizable
UNKNOWN_FOOD_NAMES = {"unknown"}


class GlycemicLoad(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    UNKNOWN = "Unknown"


class InflammatoryScore(str, Enum):
    ANTI_INFLAMMATORY = "Anti-inflammatory"
    NEUTRAL = "Neutral"
    PRO_INFLAMMATORY = "Pro-inflammatory"
    UNKNOWN = "Unknown"


class NutritionalInfo(BaseModel):
    """Macronutrients in grams plus qualitative ratings."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    carbs: float = 0
    protein: float = 0
    fats: float = 0
    glycemic_load: GlycemicLoad = GlycemicLoad.UNKNOWN
    inflammatory_score: InflammatoryScore = InflammatoryScore.UNKNOWN


class AnalysisResult(BaseModel):
    """The analysis fields produced by the inference service, after normalization."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    food_name: str = "Unknown Food"
    pcos_compatibility: int = 50
    nutritional_info: NutritionalInfo = Field(default_factory=NutritionalInfo)
    recommendation: str = "No specific recommendations available."
    alternatives: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _drop_alternatives_for_compatible_food(self):
        if self.pcos_compatibility >= ALTERNATIVES_CUTOFF and self.alternatives:
            self.alternatives = []
        return self

    @property
    def is_unidentified(self) -> bool:
        """True when the model could not tell what food was pictured."""
        return self.food_name.strip().lower() in UNKNOWN_FOOD_NAMES

    def to_history_item(self, image_url: str, item_id: Optional[str] = None) -> "FoodAnalysisItem":
        return FoodAnalysisItem(
            id=item_id or new_item_id(),
            date=datetime.now(timezone.utc),
            image_url=image_url,
            **self.model_dump(),
        )


class FoodAnalysisItem(AnalysisResult):
    """One completed image analysis as kept in the history log."""
    id: str = Field(default_factory=lambda: new_item_id())
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    image_url: str = ""

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def new_item_id() -> str:
    return uuid.uuid4().hex
