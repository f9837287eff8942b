"""Recommendation router — compute, persist, and browse life-insurance recommendations."""

import logging
import math
import time
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from coverwise.config import settings
from coverwise.database import get_db
from coverwise.dependencies import get_current_user
from coverwise.models.user import User
from coverwise.schemas.recommendation import SORT_COLUMNS, SORT_ORDERS, RecommendationRequest
from coverwise.services.recommendation.comparison import compare_options
from coverwise.services.recommendation.config import get_policy
from coverwise.services.recommendation.engine import compute
from coverwise.services.recommendation_store import recommendation_store, serialize_record

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/recommendation")
async def create_recommendation(
    req: RecommendationRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Compute a recommendation for the submitted profile and store it in the user's history."""
    started = time.perf_counter()
    profile = req.to_profile()
    policy = get_policy(settings.pricing_policy_version)

    logger.info(
        f"Processing recommendation request for user {user.id}: age={profile.age} "
        f"income={profile.income} dependents={profile.dependents} risk={profile.risk_tolerance.value}"
    )

    result = compute(profile, policy)
    rec = await recommendation_store.save(db, user.id, profile, result, policy.version)

    logger.info(
        f"Recommendation {rec.id} generated for user {user.id}: "
        f"{result.policy.type.value}, coverage={result.policy.coverage}"
    )

    return {
        **result.to_dict(),
        "id": str(rec.id),
        "timestamp": rec.created_at.isoformat() if rec.created_at else None,
        "policyVersion": policy.version,
        "processingTime": round((time.perf_counter() - started) * 1000),
    }


@router.post("/recommendation/compare")
async def compare_recommendations(
    req: RecommendationRequest,
    user: User = Depends(get_current_user),
):
    """Recommended option alongside maximum-protection and budget-friendly variants (not stored)."""
    policy = get_policy(settings.pricing_policy_version)
    options = compare_options(req.to_profile(), policy)
    return {
        "options": [option.to_dict() for option in options],
        "policyVersion": policy.version,
    }


@router.get("/recommendations")
async def list_recommendations(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sort_by: str = Query("created_at", alias="sortBy"),
    order: str = Query("desc"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Paginated history of the current user's recommendations."""
    order = order.lower()
    if sort_by not in SORT_COLUMNS:
        raise HTTPException(status_code=400, detail="Invalid sort column")
    if order not in SORT_ORDERS:
        raise HTTPException(status_code=400, detail="Invalid sort order")

    records, total = await recommendation_store.list_for_user(
        db, user.id, limit=limit, offset=offset, sort_by=sort_by, order=order
    )

    return {
        "data": [serialize_record(r) for r in records],
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "pages": math.ceil(total / limit),
            "currentPage": offset // limit + 1,
        },
    }


@router.get("/recommendations/stats")
async def recommendation_stats(db: AsyncSession = Depends(get_db)):
    """Aggregate statistics across all stored recommendations. Public."""
    return await recommendation_store.stats(db)


@router.get("/recommendations/{recommendation_id}")
async def get_recommendation(
    recommendation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rec = await recommendation_store.get_for_user(db, recommendation_id, user.id)
    if not rec:
        raise HTTPException(status_code=404, detail="Recommendation not found")
    return serialize_record(rec)
