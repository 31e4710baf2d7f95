"""
Unit tests for PCOS risk scoring.
"""

from pcos_companion.core import classify_pcos_probability, risk_score
from pcos_companion.models import PcosProbability, PeriodRegularity, Profile


class TestRiskScoring:

    def test_irregular_with_two_symptoms_is_high(self):
        profile = Profile(
            period_regularity=PeriodRegularity.IRREGULAR,
            symptoms=["Acne", "Hair thinning"],
            insulin_resistant=False,
        )
        assert risk_score(profile) == 4
        assert classify_pcos_probability(profile) == PcosProbability.HIGH

    def test_regular_with_one_symptom_is_low(self):
        profile = Profile(
            period_regularity=PeriodRegularity.REGULAR,
            symptoms=["Acne"],
            insulin_resistant=False,
        )
        assert risk_score(profile) == 1
        assert classify_pcos_probability(profile) == PcosProbability.LOW

    def test_regular_with_insulin_resistance_and_symptom_is_medium(self):
        profile = Profile(
            period_regularity=PeriodRegularity.REGULAR,
            symptoms=["Acne"],
            insulin_resistant=True,
        )
        assert risk_score(profile) == 2
        assert classify_pcos_probability(profile) == PcosProbability.MEDIUM

    def test_absent_periods_count_like_irregular(self):
        profile = Profile(period_regularity=PeriodRegularity.ABSENT)
        assert risk_score(profile) == 2
        assert classify_pcos_probability(profile) == PcosProbability.MEDIUM

    def test_painful_periods_do_not_count(self):
        profile = Profile(period_regularity=PeriodRegularity.PAINFUL)
        assert risk_score(profile) == 0

    def test_unknown_insulin_status_does_not_count(self):
        assert risk_score(Profile(insulin_resistant=None)) == 0

    def test_empty_profile_is_low(self):
        assert classify_pcos_probability(Profile()) == PcosProbability.LOW

    def test_many_symptoms(self):
        profile = Profile(symptoms=["Acne", "Weight gain", "Fatigue", "Hair thinning", "Mood swings"])
        assert risk_score(profile) == 5
        assert classify_pcos_probability(profile) == PcosProbability.HIGH

    def test_all_three_factors(self):
        profile = Profile(
            period_regularity=PeriodRegularity.IRREGULAR,
            symptoms=["A", "B"],
            insulin_resistant=True,
        )
        assert risk_score(profile) == 5
        assert classify_pcos_probability(profile) == PcosProbability.HIGH

    def test_absent_periods_with_unknown_insulin_status(self):
        profile = Profile(period_regularity=PeriodRegularity.ABSENT, symptoms=["A"], insulin_resistant=None)
        assert risk_score(profile) == 3
        assert classify_pcos_probability(profile) == PcosProbability.MEDIUM
