"""Recommendation engine — turns a UserProfile into a priced policy recommendation.

Every stage is a pure function of its inputs and the PricingPolicy, so the
whole pipeline is deterministic and safe to call concurrently.
"""

import logging
import math

from coverwise.services.recommendation.config import DEFAULT_POLICY, PricingPolicy
from coverwise.services.recommendation.domain import (
    PolicyRecommendation,
    PolicyType,
    RecommendationFactors,
    RecommendationResult,
    RiskTolerance,
    UserProfile,
)
from coverwise.services.recommendation.explanation import build_explanation

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (2.5 → 3, not 2)."""
    return int(math.floor(value + 0.5))


# ─── Sizing factors ───


def income_multiplier(age: int, policy: PricingPolicy = DEFAULT_POLICY) -> int:
    return policy.coverage.income_multipliers.lookup(age)


def dependents_factor(dependents: int, policy: PricingPolicy = DEFAULT_POLICY) -> float:
    return 1 + dependents * policy.coverage.dependent_step


def risk_adjustment(risk_tolerance: RiskTolerance, policy: PricingPolicy = DEFAULT_POLICY) -> float:
    return policy.coverage.risk_adjustments[risk_tolerance]


def coverage_amount(
    income: int,
    factors: RecommendationFactors,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> int:
    """Snap to the rounding unit, apply the floor, then the income cap.

    The cap is applied last, so when ``income × cap_multiple`` is below the
    floor the cap wins and coverage ends up below the floor. With
    ``snap_cap_to_unit`` the cap itself is rounded down to the unit so a
    binding cap still yields a whole multiple of it.
    """
    rules = policy.coverage
    raw = income * factors.income_multiplier * factors.dependents_factor * factors.risk_adjustment
    coverage = round_half_up(raw / rules.rounding_unit) * rules.rounding_unit
    coverage = max(coverage, rules.minimum)
    cap = income * rules.income_cap_multiple
    if rules.snap_cap_to_unit:
        cap = cap // rules.rounding_unit * rules.rounding_unit
    if coverage > cap:
        logger.debug(f"Coverage {coverage} capped at {cap} ({rules.income_cap_multiple}x income)")
        coverage = cap
    return coverage


# ─── Policy shape ───


def term_years(age: int, policy: PricingPolicy = DEFAULT_POLICY) -> int:
    return policy.term.terms.lookup(age)


def policy_type(profile: UserProfile, policy: PricingPolicy = DEFAULT_POLICY) -> PolicyType:
    """First matching rule wins."""
    rules = policy.policy_type
    if profile.risk_tolerance == RiskTolerance.LOW and profile.income > rules.whole_life_min_income:
        return PolicyType.WHOLE_LIFE
    if (
        profile.risk_tolerance == RiskTolerance.MEDIUM
        and profile.income > rules.universal_life_min_income
        and profile.age < rules.universal_life_max_age
    ):
        return PolicyType.UNIVERSAL_LIFE
    return PolicyType.TERM_LIFE


# ─── Pricing ───


def age_factor(age: int, policy: PricingPolicy = DEFAULT_POLICY) -> float:
    """Exponential age loading; below 1.0 for ages under the pivot."""
    rates = policy.premium
    return math.pow(rates.age_base, age - rates.age_pivot)


def monthly_premium(
    age: int,
    coverage: int,
    term: int,
    kind: PolicyType,
    risk_tolerance: RiskTolerance,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> int:
    rates = policy.premium
    premium = coverage / rates.coverage_unit * rates.base_rate
    premium *= age_factor(age, policy)
    premium *= rates.term_factors[term]
    premium *= rates.type_factors[kind]
    premium *= rates.health_factor
    premium *= rates.risk_loadings[risk_tolerance]
    return round_half_up(premium)


# ─── Orchestration ───


def compute(profile: UserProfile, policy: PricingPolicy = DEFAULT_POLICY) -> RecommendationResult:
    """Compute a complete recommendation for a validated profile."""
    logger.debug(
        f"Calculating recommendation (policy {policy.version}): age={profile.age} "
        f"income={profile.income} dependents={profile.dependents} "
        f"risk={profile.risk_tolerance.value}"
    )

    factors = RecommendationFactors(
        income_multiplier=income_multiplier(profile.age, policy),
        dependents_factor=dependents_factor(profile.dependents, policy),
        risk_adjustment=risk_adjustment(profile.risk_tolerance, policy),
    )
    coverage = coverage_amount(profile.income, factors, policy)
    term = term_years(profile.age, policy)
    kind = policy_type(profile, policy)
    premium = monthly_premium(profile.age, coverage, term, kind, profile.risk_tolerance, policy)

    explanation = build_explanation(profile, coverage, term, kind, factors)

    logger.info(
        f"Recommendation calculated: {kind.value}, coverage={coverage}, "
        f"term={term}, monthly_premium={premium}"
    )

    return RecommendationResult(
        policy=PolicyRecommendation(
            type=kind,
            coverage=coverage,
            term=term,
            monthly_premium=premium,
        ),
        explanation=explanation,
        factors=factors,
    )
