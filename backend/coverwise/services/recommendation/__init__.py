"""Recommendation engine — deterministic life-insurance recommendation rules.

Modules:
    domain        Profile / result value objects, enums, InvalidProfile
    bands         Ordered first-match band tables
    config        Versioned PricingPolicy (every numeric constant) + registry
    engine        Stage functions and the compute() orchestrator
    explanation   Independently testable explanation fragments
    comparison    Labelled alternatives (recommended / max protection / budget)

Pipeline:
    income multiplier → dependents factor → risk adjustment → coverage
    → term → policy type → premium → explanation
"""
