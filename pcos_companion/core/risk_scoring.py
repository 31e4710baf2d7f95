"""
Risk Scoring - Maps questionnaire answers to a three-level PCOS likelihood.
Pure functions, no I/O.
"""

from ..models import PcosProbability, PeriodRegularity, Profile

CYCLE_FLAGS = {PeriodRegularity.IRREGULAR, PeriodRegularity.ABSENT}

HIGH_THRESHOLD = 4
MEDIUM_THRESHOLD = 2


def risk_score(profile: Profile) -> int:
    score = 0
    if profile.period_regularity in CYCLE_FLAGS:
        score += 2
    score += len(profile.symptoms)
    if profile.insulin_resistant is True:
        score += 1
    return score


def classify_pcos_probability(profile: Profile) -> PcosProbability:
    """
    Classify the answers given so far.

    irregular or absent periods count 2, each selected symptom 1, confirmed
    insulin resistance 1; 4 and above is high, 2 and above is medium.
    """
    score = risk_score(profile)
    if score >= HIGH_THRESHOLD:
        return PcosProbability.HIGH
    if score >= MEDIUM_THRESHOLD:
        return PcosProbability.MEDIUM
    return PcosProbability.LOW
