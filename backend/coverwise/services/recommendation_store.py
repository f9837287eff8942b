"""Recommendation store — persists computed recommendations and serves history and stats."""

import logging
import uuid
from decimal import Decimal

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from coverwise.models.recommendation import Recommendation
from coverwise.services.recommendation.domain import RecommendationResult, UserProfile

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "created_at": Recommendation.created_at,
    "coverage_amount": Recommendation.coverage_amount,
    "age": Recommendation.age,
    "income": Recommendation.income,
    "monthly_premium": Recommendation.monthly_premium,
}


def serialize_record(rec: Recommendation) -> dict:
    return {
        "id": str(rec.id),
        "age": rec.age,
        "income": rec.income,
        "dependents": rec.dependents,
        "risk_tolerance": rec.risk_tolerance,
        "recommendation_type": rec.recommendation_type,
        "coverage_amount": rec.coverage_amount,
        "term_years": rec.term_years,
        "monthly_premium": rec.monthly_premium,
        "explanation": rec.explanation,
        "income_multiplier": _as_float(rec.income_multiplier),
        "dependents_factor": _as_float(rec.dependents_factor),
        "risk_adjustment": _as_float(rec.risk_adjustment),
        "policy_version": rec.policy_version,
        "created_at": rec.created_at.isoformat() if rec.created_at else None,
    }


class RecommendationStore:
    """Thin persistence layer around the recommendations table."""

    async def save(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        profile: UserProfile,
        result: RecommendationResult,
        policy_version: str,
    ) -> Recommendation:
        rec = Recommendation(
            user_id=user_id,
            age=profile.age,
            income=profile.income,
            dependents=profile.dependents,
            risk_tolerance=profile.risk_tolerance.value,
            recommendation_type=result.policy.type.value,
            coverage_amount=result.policy.coverage,
            term_years=result.policy.term,
            monthly_premium=result.policy.monthly_premium,
            explanation=result.explanation,
            income_multiplier=Decimal(str(result.factors.income_multiplier)),
            dependents_factor=Decimal(str(result.factors.dependents_factor)),
            risk_adjustment=Decimal(str(result.factors.risk_adjustment)),
            policy_version=policy_version,
        )
        db.add(rec)
        await db.commit()
        await db.refresh(rec)
        logger.info(f"Stored recommendation {rec.id} for user {user_id}")
        return rec

    async def get_for_user(
        self, db: AsyncSession, recommendation_id: uuid.UUID, user_id: uuid.UUID
    ) -> Recommendation | None:
        result = await db.execute(
            select(Recommendation).where(
                Recommendation.id == recommendation_id,
                Recommendation.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        limit: int = 10,
        offset: int = 0,
        sort_by: str = "created_at",
        order: str = "desc",
    ) -> tuple[list[Recommendation], int]:
        """Return one page of the user's history and the user's total record count."""
        column = SORTABLE_COLUMNS[sort_by]
        direction = asc if order == "asc" else desc

        total = (
            await db.execute(
                select(func.count(Recommendation.id)).where(Recommendation.user_id == user_id)
            )
        ).scalar() or 0

        result = await db.execute(
            select(Recommendation)
            .where(Recommendation.user_id == user_id)
            .order_by(direction(column), direction(Recommendation.created_at))
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    async def stats(self, db: AsyncSession) -> dict:
        """Aggregate statistics across all users' recommendations."""
        summary_row = (
            await db.execute(
                select(
                    func.count(Recommendation.id),
                    func.avg(Recommendation.age),
                    func.avg(Recommendation.income),
                    func.avg(Recommendation.coverage_amount),
                    func.avg(Recommendation.monthly_premium),
                )
            )
        ).one()
        total, avg_age, avg_income, avg_coverage, avg_premium = summary_row

        type_distribution = await self._distribution(db, Recommendation.recommendation_type, total)
        risk_distribution = await self._distribution(db, Recommendation.risk_tolerance, total)

        return {
            "summary": {
                "total_recommendations": total,
                "average_age": _rounded(avg_age, 1),
                "average_income": _rounded(avg_income, 0),
                "average_coverage": _rounded(avg_coverage, 0),
                "average_premium": _rounded(avg_premium, 2),
                "most_common_type": type_distribution[0]["recommendation_type"] if type_distribution else None,
                "most_common_risk_tolerance": risk_distribution[0]["risk_tolerance"] if risk_distribution else None,
            },
            "typeDistribution": type_distribution,
            "riskToleranceDistribution": risk_distribution,
        }

    async def _distribution(self, db: AsyncSession, column, total: int) -> list[dict]:
        count = func.count(Recommendation.id).label("count")
        result = await db.execute(
            select(column, count).group_by(column).order_by(count.desc(), column)
        )
        return [
            {
                column.key: value,
                "count": n,
                "percentage": round(n * 100.0 / total, 2) if total else 0.0,
            }
            for value, n in result.all()
        ]


def _as_float(value: Decimal | float | None) -> float | None:
    return float(value) if value is not None else None


def _rounded(value, digits: int) -> float | None:
    if value is None:
        return None
    return round(float(value), digits)


recommendation_store = RecommendationStore()
