"""Pricing policy — single versioned source for every recommendation constant.

Persisted recommendations record the policy version they were computed with,
so a version must never be edited once released: add a new one instead.
"""

from dataclasses import dataclass, field

from coverwise.services.recommendation.bands import BandTable, band_table
from coverwise.services.recommendation.domain import PolicyType, RiskTolerance


@dataclass(frozen=True)
class CoverageRules:
    """Coverage sizing: income × multiplier × dependents × risk, snapped, floored, capped."""
    income_multipliers: BandTable[int] = field(
        default_factory=lambda: band_table((30, 15), (40, 12), (50, 10), default=8)
    )
    dependent_step: float = 0.25         # +25% per dependent, uncapped
    risk_adjustments: dict[RiskTolerance, float] = field(
        default_factory=lambda: {
            RiskTolerance.LOW: 1.2,
            RiskTolerance.MEDIUM: 1.0,
            RiskTolerance.HIGH: 0.8,
        }
    )
    rounding_unit: int = 10_000
    minimum: int = 100_000
    income_cap_multiple: int = 30
    snap_cap_to_unit: bool = False       # round the income cap down to rounding_unit


@dataclass(frozen=True)
class TermRules:
    """Term length in years by age."""
    terms: BandTable[int] = field(
        default_factory=lambda: band_table((35, 30), (45, 20), (55, 15), default=10)
    )


@dataclass(frozen=True)
class PolicyTypeRules:
    """Thresholds for the first-match policy type rules."""
    whole_life_min_income: int = 150_000      # strictly greater, low risk only
    universal_life_min_income: int = 200_000  # strictly greater, medium risk only
    universal_life_max_age: int = 50          # strictly below


@dataclass(frozen=True)
class PremiumRates:
    """Monthly premium per 1,000 of coverage and its loadings."""
    coverage_unit: int = 1_000
    base_rate: float = 0.5
    age_base: float = 1.045          # exponential loading per year
    age_pivot: int = 25              # age at which the loading is 1.0
    term_factors: dict[int, float] = field(
        default_factory=lambda: {10: 1.2, 15: 1.1, 20: 1.0, 30: 0.9}
    )
    type_factors: dict[PolicyType, float] = field(
        default_factory=lambda: {
            PolicyType.TERM_LIFE: 1.0,
            PolicyType.WHOLE_LIFE: 3.5,
            PolicyType.UNIVERSAL_LIFE: 2.5,
        }
    )
    health_factor: float = 1.0       # reserved, neutral
    risk_loadings: dict[RiskTolerance, float] = field(
        default_factory=lambda: {
            RiskTolerance.LOW: 1.05,
            RiskTolerance.MEDIUM: 1.0,
            RiskTolerance.HIGH: 0.95,
        }
    )


@dataclass(frozen=True)
class PricingPolicy:
    """Top-level policy aggregating all rule sets."""
    version: str = "2024.1"
    coverage: CoverageRules = field(default_factory=CoverageRules)
    term: TermRules = field(default_factory=TermRules)
    policy_type: PolicyTypeRules = field(default_factory=PolicyTypeRules)
    premium: PremiumRates = field(default_factory=PremiumRates)


DEFAULT_POLICY = PricingPolicy()

# Same rates, but a binding income cap is rounded down to the coverage unit
UNIT_CAP_POLICY = PricingPolicy(
    version="2024.1-unit-cap",
    coverage=CoverageRules(snap_cap_to_unit=True),
)

POLICY_REGISTRY: dict[str, PricingPolicy] = {
    policy.version: policy for policy in (DEFAULT_POLICY, UNIT_CAP_POLICY)
}


class UnknownPolicyVersion(KeyError):
    pass


def get_policy(version: str | None = None) -> PricingPolicy:
    """Look up a registered policy; ``None`` returns the default."""
    if version is None:
        return DEFAULT_POLICY
    try:
        return POLICY_REGISTRY[version]
    except KeyError:
        raise UnknownPolicyVersion(
            f"Unknown pricing policy version {version!r}; known: {sorted(POLICY_REGISTRY)}"
        ) from None
