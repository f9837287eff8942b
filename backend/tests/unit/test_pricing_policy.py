import dataclasses

import pytest

from coverwise.services.recommendation.bands import band_table
from coverwise.services.recommendation.config import (
    DEFAULT_POLICY,
    POLICY_REGISTRY,
    UNIT_CAP_POLICY,
    CoverageRules,
    PremiumRates,
    PricingPolicy,
    UnknownPolicyVersion,
    get_policy,
)
from coverwise.services.recommendation.engine import compute


def test_default_policy_is_registered():
    assert get_policy() is DEFAULT_POLICY
    assert get_policy(DEFAULT_POLICY.version) is DEFAULT_POLICY
    assert POLICY_REGISTRY[DEFAULT_POLICY.version] is DEFAULT_POLICY


def test_unknown_version_raises():
    with pytest.raises(UnknownPolicyVersion):
        get_policy("1999.9")


def test_policy_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_POLICY.version = "hacked"
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_POLICY.premium.base_rate = 1.0


def test_default_constants():
    assert DEFAULT_POLICY.coverage.minimum == 100_000
    assert DEFAULT_POLICY.coverage.rounding_unit == 10_000
    assert DEFAULT_POLICY.coverage.income_cap_multiple == 30
    assert DEFAULT_POLICY.premium.base_rate == 0.5
    assert DEFAULT_POLICY.premium.age_base == 1.045
    assert DEFAULT_POLICY.premium.health_factor == 1.0


def test_engine_uses_the_policy_it_is_given(make_profile):
    profile = make_profile(age=35, income=75_000, dependents=2, risk="medium")
    doubled = PricingPolicy(
        version="test.doubled",
        premium=PremiumRates(base_rate=1.0),
    )

    baseline = compute(profile)
    repriced = compute(profile, doubled)

    assert repriced.policy.coverage == baseline.policy.coverage
    assert repriced.policy.monthly_premium == 2097  # 1350 × 1.0 × 1.045^10


def test_custom_multiplier_table(make_profile):
    flat = PricingPolicy(
        version="test.flat",
        coverage=CoverageRules(income_multipliers=band_table(default=10)),
    )
    result = compute(make_profile(age=22, income=50_000, dependents=0, risk="medium"), flat)
    assert result.factors.income_multiplier == 10
    assert result.policy.coverage == 500_000


def test_unit_cap_policy_is_registered_and_opt_in(make_profile):
    profile = make_profile(age=25, income=75_001, dependents=3, risk="low")

    assert DEFAULT_POLICY.coverage.snap_cap_to_unit is False
    assert compute(profile).policy.coverage == 2_250_030
    assert compute(profile, get_policy("2024.1-unit-cap")).policy.coverage == 2_250_000
    assert get_policy("2024.1-unit-cap") is UNIT_CAP_POLICY
