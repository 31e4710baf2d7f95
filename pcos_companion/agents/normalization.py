"""
Normalization of untyped analysis replies into the strict AnalysisResult shape.
Every field has one deterministic default used when it is missing or of the wrong type.
"""

import math
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

from ..models import AnalysisResult, GlycemicLoad, InflammatoryScore, NutritionalInfo

E = TypeVar("E", bound=Enum)

DEFAULT_FOOD_NAME = "Unknown Food"
# Only for a missing or non-numeric score; an explicit 0 is kept as 0
DEFAULT_COMPATIBILITY = 50
DEFAULT_RECOMMENDATION = "No specific recommendations available."


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _number(value: Any) -> Optional[float]:
    """Coerce to a finite float; None when that is not possible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%g").strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _enum(value: Any, enum_cls: Type[E], default: E) -> E:
    if not isinstance(value, str):
        return default
    wanted = value.strip().lower().replace("_", "-").replace(" ", "-")
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    return default


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def normalize_analysis(raw: Any) -> AnalysisResult:
    """
    Build an AnalysisResult from a decoded JSON reply.

    Compatibility is coerced to a whole number but not range-clamped; when it
    is 80 or more the alternatives are dropped regardless of the reply.
    """
    data = raw if isinstance(raw, dict) else {}
    nutrition = data.get("nutritionalInfo")
    nutrition = nutrition if isinstance(nutrition, dict) else {}

    compatibility = _number(data.get("pcosCompatibility"))

    return AnalysisResult(
        food_name=_text(data.get("foodName"), DEFAULT_FOOD_NAME),
        pcos_compatibility=round(compatibility) if compatibility is not None else DEFAULT_COMPATIBILITY,
        nutritional_info=NutritionalInfo(
            carbs=_number(nutrition.get("carbs")) or 0,
            protein=_number(nutrition.get("protein")) or 0,
            fats=_number(nutrition.get("fats")) or 0,
            glycemic_load=_enum(nutrition.get("glycemicLoad"), GlycemicLoad, GlycemicLoad.UNKNOWN),
            inflammatory_score=_enum(
                nutrition.get("inflammatoryScore"), InflammatoryScore, InflammatoryScore.UNKNOWN
            ),
        ),
        recommendation=_text(data.get("recommendation"), DEFAULT_RECOMMENDATION),
        alternatives=_string_list(data.get("alternatives")),
    )
