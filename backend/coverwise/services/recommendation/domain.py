"""Value objects flowing through the recommendation engine."""

from dataclasses import dataclass
from enum import Enum


class InvalidProfile(ValueError):
    """A profile field is outside its domain."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class RiskTolerance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PolicyType(str, Enum):
    TERM_LIFE = "Term Life"
    WHOLE_LIFE = "Whole Life"
    UNIVERSAL_LIFE = "Universal Life"


MIN_AGE = 18
MAX_AGE = 100
MAX_INCOME = 1_000_000_000


@dataclass(frozen=True)
class UserProfile:
    age: int
    income: int
    dependents: int
    risk_tolerance: RiskTolerance

    def __post_init__(self):
        if isinstance(self.age, bool) or not isinstance(self.age, int) or not MIN_AGE <= self.age <= MAX_AGE:
            raise InvalidProfile("age", f"Age must be between {MIN_AGE} and {MAX_AGE}")
        if isinstance(self.income, bool) or not isinstance(self.income, int) or not 0 <= self.income <= MAX_INCOME:
            raise InvalidProfile("income", f"Income must be an integer between 0 and {MAX_INCOME:,}")
        if isinstance(self.dependents, bool) or not isinstance(self.dependents, int) or self.dependents < 0:
            raise InvalidProfile("dependents", "Dependents must be a non-negative integer")
        try:
            # Frozen dataclass: coerce "low" → RiskTolerance.LOW in place
            object.__setattr__(self, "risk_tolerance", RiskTolerance(self.risk_tolerance))
        except ValueError:
            raise InvalidProfile("risk_tolerance", "Risk tolerance must be low, medium, or high") from None

    def with_risk_tolerance(self, risk_tolerance: RiskTolerance) -> "UserProfile":
        return UserProfile(
            age=self.age,
            income=self.income,
            dependents=self.dependents,
            risk_tolerance=risk_tolerance,
        )


@dataclass(frozen=True)
class PolicyRecommendation:
    type: PolicyType
    coverage: int
    term: int
    monthly_premium: int


@dataclass(frozen=True)
class RecommendationFactors:
    income_multiplier: float
    dependents_factor: float
    risk_adjustment: float


@dataclass(frozen=True)
class RecommendationResult:
    policy: PolicyRecommendation
    explanation: str
    factors: RecommendationFactors

    def to_dict(self) -> dict:
        """API response shape (camelCase keys)."""
        return {
            "recommendation": {
                "type": self.policy.type.value,
                "coverage": self.policy.coverage,
                "term": self.policy.term,
                "monthlyPremium": self.policy.monthly_premium,
            },
            "explanation": self.explanation,
            "factors": {
                "incomeMultiplier": self.factors.income_multiplier,
                "dependentsFactor": self.factors.dependents_factor,
                "riskAdjustment": self.factors.risk_adjustment,
            },
        }
