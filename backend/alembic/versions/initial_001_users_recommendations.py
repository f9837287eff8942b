"""Users and recommendations tables

Revision ID: initial_001
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

revision = "initial_001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "recommendations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        # Input profile
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("income", sa.BigInteger(), nullable=False),
        sa.Column("dependents", sa.Integer(), nullable=False),
        sa.Column("risk_tolerance", sa.String(10), nullable=False),
        # Result
        sa.Column("recommendation_type", sa.String(50), nullable=False),
        sa.Column("coverage_amount", sa.BigInteger(), nullable=False),
        sa.Column("term_years", sa.Integer(), nullable=False),
        sa.Column("monthly_premium", sa.BigInteger(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=False),
        sa.Column("income_multiplier", sa.Numeric(6, 2), nullable=False),
        sa.Column("dependents_factor", sa.Numeric(8, 2), nullable=False),
        sa.Column("risk_adjustment", sa.Numeric(6, 2), nullable=False),
        sa.Column("policy_version", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("age >= 18 AND age <= 100", name="ck_recommendations_age"),
        sa.CheckConstraint("income >= 0", name="ck_recommendations_income"),
        sa.CheckConstraint("dependents >= 0", name="ck_recommendations_dependents"),
        sa.CheckConstraint(
            "risk_tolerance IN ('low', 'medium', 'high')", name="ck_recommendations_risk"
        ),
    )
    op.create_index("ix_recommendations_user_created", "recommendations", ["user_id", "created_at"])
    op.create_index("ix_recommendations_created_at", "recommendations", ["created_at"])
    op.create_index("ix_recommendations_type", "recommendations", ["recommendation_type"])
    op.create_index("ix_recommendations_risk", "recommendations", ["risk_tolerance"])


def downgrade() -> None:
    op.drop_index("ix_recommendations_risk")
    op.drop_index("ix_recommendations_type")
    op.drop_index("ix_recommendations_created_at")
    op.drop_index("ix_recommendations_user_created")
    op.drop_table("recommendations")
    op.drop_index("ix_users_email")
    op.drop_table("users")
