import pytest

from coverwise.services.recommendation.domain import (
    MAX_INCOME,
    InvalidProfile,
    PolicyType,
    RecommendationFactors,
    RecommendationResult,
    PolicyRecommendation,
    RiskTolerance,
    UserProfile,
)


def test_profile_accepts_boundaries():
    UserProfile(age=18, income=0, dependents=0, risk_tolerance=RiskTolerance.LOW)
    UserProfile(age=100, income=MAX_INCOME, dependents=12, risk_tolerance=RiskTolerance.HIGH)


def test_profile_coerces_risk_string():
    profile = UserProfile(age=40, income=1, dependents=0, risk_tolerance="medium")
    assert profile.risk_tolerance is RiskTolerance.MEDIUM


@pytest.mark.parametrize(
    "kwargs,field",
    [
        ({"age": 17}, "age"),
        ({"age": 101}, "age"),
        ({"age": 30.5}, "age"),
        ({"age": True}, "age"),
        ({"income": -1}, "income"),
        ({"income": 1000.0}, "income"),
        ({"income": MAX_INCOME + 1}, "income"),
        ({"dependents": -1}, "dependents"),
        ({"risk_tolerance": "extreme"}, "risk_tolerance"),
        ({"risk_tolerance": "LOW"}, "risk_tolerance"),
    ],
)
def test_out_of_domain_fields_raise_invalid_profile(kwargs, field):
    values = {"age": 30, "income": 50_000, "dependents": 0, "risk_tolerance": "low", **kwargs}
    with pytest.raises(InvalidProfile) as exc:
        UserProfile(**values)
    assert exc.value.field == field


def test_invalid_profile_is_a_value_error():
    assert issubclass(InvalidProfile, ValueError)


def test_with_risk_tolerance_returns_new_profile(make_profile):
    profile = make_profile(risk="medium")
    variant = profile.with_risk_tolerance(RiskTolerance.HIGH)
    assert variant.risk_tolerance is RiskTolerance.HIGH
    assert profile.risk_tolerance is RiskTolerance.MEDIUM
    assert (variant.age, variant.income, variant.dependents) == (profile.age, profile.income, profile.dependents)


def test_result_to_dict_uses_api_shape():
    result = RecommendationResult(
        policy=PolicyRecommendation(type=PolicyType.WHOLE_LIFE, coverage=500_000, term=20, monthly_premium=321),
        explanation="text",
        factors=RecommendationFactors(income_multiplier=12, dependents_factor=1.25, risk_adjustment=1.2),
    )
    assert result.to_dict() == {
        "recommendation": {"type": "Whole Life", "coverage": 500_000, "term": 20, "monthlyPremium": 321},
        "explanation": "text",
        "factors": {"incomeMultiplier": 12, "dependentsFactor": 1.25, "riskAdjustment": 1.2},
    }
