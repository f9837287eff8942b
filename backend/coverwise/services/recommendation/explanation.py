"""Explanation fragments — one sentence group per rationale category.

Each fragment is a pure function of the profile and computed values so its
trigger condition can be tested on its own. ``build_explanation`` joins them
in display order.
"""

from coverwise.services.recommendation.domain import (
    PolicyType,
    RecommendationFactors,
    RiskTolerance,
    UserProfile,
)

# Age bands for the narrative (independent of the pricing term bands)
EARLY_CAREER_MAX_AGE = 35
MID_CAREER_MAX_AGE = 50

RISK_RATIONALE: dict[RiskTolerance, str] = {
    RiskTolerance.LOW: (
        "Your conservative risk preference indicates a focus on maximum protection. "
        "We've adjusted your coverage upward to provide additional security."
    ),
    RiskTolerance.MEDIUM: (
        "Your balanced risk tolerance allows for a standard coverage approach "
        "that provides solid protection without over-insuring."
    ),
    RiskTolerance.HIGH: (
        "Your higher risk tolerance suggests you may have other investments in place. "
        "We've recommended efficient coverage that complements your overall financial strategy."
    ),
}

POLICY_TYPE_RATIONALE: dict[PolicyType, str] = {
    PolicyType.WHOLE_LIFE: (
        "Given your income level and conservative approach, whole life insurance provides "
        "permanent coverage with a cash value component that grows tax-deferred over time."
    ),
    PolicyType.UNIVERSAL_LIFE: (
        "Universal life insurance offers flexibility in premiums and death benefits, "
        "along with a cash value component that can supplement your retirement planning."
    ),
    PolicyType.TERM_LIFE: (
        "Term life insurance provides the most affordable way to secure maximum coverage "
        "during your working years when your family needs it most."
    ),
}


def age_rationale(age: int, term: int) -> str:
    if age < EARLY_CAREER_MAX_AGE:
        return (
            f"At {age} years old, you're in a prime age for securing affordable life insurance. "
            f"We recommend a {term}-year term to provide coverage through your key earning years."
        )
    if age < MID_CAREER_MAX_AGE:
        return (
            f"At {age} years old, life insurance is crucial for protecting your family's financial future. "
            f"A {term}-year term aligns well with your remaining working years."
        )
    return (
        f"At {age} years old, a {term}-year term provides essential coverage "
        f"while keeping premiums manageable as you approach retirement."
    )


def income_rationale(income: int, income_multiplier: float) -> str:
    return (
        f"Based on your annual income of ${income:,}, "
        f"we applied a {_number(income_multiplier)}x multiplier. This ensures your loved ones "
        f"can maintain their current lifestyle and meet long-term financial obligations."
    )


def dependents_rationale(dependents: int, dependents_factor: float) -> str:
    if dependents == 0:
        return (
            "While you have no dependents, life insurance can still cover final expenses, "
            "outstanding debts, and provide for any future family plans."
        )
    noun = "dependent" if dependents == 1 else "dependents"
    increase_pct = round((dependents_factor - 1) * 100)
    return (
        f"With {dependents} {noun}, we've increased your coverage by "
        f"{increase_pct}% to account for education costs, "
        f"childcare, and other family expenses."
    )


def risk_rationale(risk_tolerance: RiskTolerance) -> str:
    return RISK_RATIONALE[risk_tolerance]


def policy_type_rationale(policy_type: PolicyType) -> str:
    return POLICY_TYPE_RATIONALE[policy_type]


def closing_summary(coverage: int) -> str:
    return (
        f"The recommended coverage of ${coverage:,} represents a careful balance "
        f"of your income replacement needs, family obligations, and premium affordability."
    )


def build_explanation(
    profile: UserProfile,
    coverage: int,
    term: int,
    policy_type: PolicyType,
    factors: RecommendationFactors,
) -> str:
    fragments = [
        age_rationale(profile.age, term),
        income_rationale(profile.income, factors.income_multiplier),
        dependents_rationale(profile.dependents, factors.dependents_factor),
        risk_rationale(profile.risk_tolerance),
        policy_type_rationale(policy_type),
        closing_summary(coverage),
    ]
    return " ".join(fragments)


def _number(value: float) -> str:
    """Render 12 / 12.0 as "12" and 12.5 as "12.5"."""
    return f"{value:g}"
