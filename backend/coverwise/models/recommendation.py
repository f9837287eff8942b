import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coverwise.database import Base


class Recommendation(Base):
    """One computed recommendation: the input profile, the result, and the policy version used."""

    __tablename__ = "recommendations"
    __table_args__ = (
        Index("ix_recommendations_user_created", "user_id", "created_at"),
        Index("ix_recommendations_created_at", "created_at"),
        Index("ix_recommendations_type", "recommendation_type"),
        Index("ix_recommendations_risk", "risk_tolerance"),
        CheckConstraint("age >= 18 AND age <= 100", name="ck_recommendations_age"),
        CheckConstraint("income >= 0", name="ck_recommendations_income"),
        CheckConstraint("dependents >= 0", name="ck_recommendations_dependents"),
        CheckConstraint("risk_tolerance IN ('low', 'medium', 'high')", name="ck_recommendations_risk"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # Input profile
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    income: Mapped[int] = mapped_column(BigInteger, nullable=False)
    dependents: Mapped[int] = mapped_column(Integer, nullable=False)
    risk_tolerance: Mapped[str] = mapped_column(String(10), nullable=False)
    # Result
    recommendation_type: Mapped[str] = mapped_column(String(50), nullable=False)
    coverage_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    term_years: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_premium: Mapped[int] = mapped_column(BigInteger, nullable=False)
    explanation: Mapped[str] = mapped_column(Text, nullable=False)
    income_multiplier: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    dependents_factor: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    risk_adjustment: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    policy_version: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user: Mapped["User"] = relationship(back_populates="recommendations")
