"""Side-by-side alternatives: the recommendation plus its most and least protective variants."""

from dataclasses import dataclass

from coverwise.services.recommendation.config import DEFAULT_POLICY, PricingPolicy
from coverwise.services.recommendation.domain import RecommendationResult, RiskTolerance, UserProfile
from coverwise.services.recommendation.engine import compute


@dataclass(frozen=True)
class RecommendationOption:
    label: str
    priority: int
    result: RecommendationResult

    def to_dict(self) -> dict:
        return {"label": self.label, "priority": self.priority, **self.result.to_dict()}


# (label, risk tolerance override); None keeps the profile's own tolerance
ALTERNATIVES: tuple[tuple[str, RiskTolerance | None], ...] = (
    ("Recommended", None),
    ("Maximum Protection", RiskTolerance.LOW),
    ("Budget-Friendly", RiskTolerance.HIGH),
)


def compare_options(profile: UserProfile, policy: PricingPolicy = DEFAULT_POLICY) -> list[RecommendationOption]:
    options = []
    for priority, (label, risk_override) in enumerate(ALTERNATIVES, start=1):
        variant = profile if risk_override is None else profile.with_risk_tolerance(risk_override)
        options.append(RecommendationOption(label=label, priority=priority, result=compute(variant, policy)))
    return options
