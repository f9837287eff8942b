from pydantic import BaseModel, Field, field_validator

from coverwise.services.recommendation.domain import MAX_AGE, MAX_INCOME, MIN_AGE, RiskTolerance, UserProfile


class RecommendationRequest(BaseModel):
    age: int = Field(ge=MIN_AGE, le=MAX_AGE)
    income: int = Field(ge=0, le=MAX_INCOME)
    dependents: int = Field(ge=0)
    risk_tolerance: RiskTolerance = Field(alias="riskTolerance")

    model_config = {"populate_by_name": True}

    @field_validator("risk_tolerance", mode="before")
    @classmethod
    def lowercase_risk(cls, v):
        return v.lower() if isinstance(v, str) else v

    def to_profile(self) -> UserProfile:
        return UserProfile(
            age=self.age,
            income=self.income,
            dependents=self.dependents,
            risk_tolerance=self.risk_tolerance,
        )


SORT_COLUMNS = ("created_at", "coverage_amount", "age", "income", "monthly_premium")
SORT_ORDERS = ("asc", "desc")
