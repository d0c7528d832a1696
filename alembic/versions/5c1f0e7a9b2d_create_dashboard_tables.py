"""create dashboard tables

Revision ID: 5c1f0e7a9b2d
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1f0e7a9b2d"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_profiles_email"), "profiles", ["email"], unique=False)

    op.create_table(
        "meal_plans",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=20), nullable=False),
        sa.Column("calories", sa.Integer(), nullable=False),
        sa.Column("protein", sa.Integer(), nullable=False),
        sa.Column("meals", sa.Integer(), nullable=False),
        *_timestamps(),
    )

    # user_id is the upsert conflict key; plan_id deliberately has no ON DELETE CASCADE
    op.create_table(
        "user_meal_plans",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("plan_id", sa.String(length=36), sa.ForeignKey("meal_plans.id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(
        op.f("ix_user_meal_plans_plan_id"), "user_meal_plans", ["plan_id"], unique=False
    )

    op.create_table(
        "nutrition_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("profiles.id"), nullable=True),
        sa.Column("calories", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_nutrition_logs_user_id"), "nutrition_logs", ["user_id"])

    op.create_table(
        "water_intake",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("profiles.id"), nullable=True),
        sa.Column("amount_ml", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_water_intake_user_id"), "water_intake", ["user_id"])

    op.create_table(
        "recipes",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("recipes")
    op.drop_index(op.f("ix_water_intake_user_id"), table_name="water_intake")
    op.drop_table("water_intake")
    op.drop_index(op.f("ix_nutrition_logs_user_id"), table_name="nutrition_logs")
    op.drop_table("nutrition_logs")
    op.drop_index(op.f("ix_user_meal_plans_plan_id"), table_name="user_meal_plans")
    op.drop_table("user_meal_plans")
    op.drop_table("meal_plans")
    op.drop_index(op.f("ix_profiles_email"), table_name="profiles")
    op.drop_table("profiles")
