"""Create pricing rule and horsepower band tables

Revision ID: 3c1f9e2b7a10
Revises:
Create Date: 2026-10-19 09:12:31.402118

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9e2b7a10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "pricing_rules",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("package_id", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("car_age_months_from", sa.Integer(), nullable=True),
        sa.Column("car_age_months_to", sa.Integer(), nullable=True),
        sa.Column("mileage_km_from", sa.Integer(), nullable=True),
        sa.Column("mileage_km_to", sa.Integer(), nullable=True),
        sa.Column("engine_size_ccm_from", sa.Integer(), nullable=True),
        sa.Column("engine_size_ccm_to", sa.Integer(), nullable=True),
        sa.Column("motor_power_hp_from", sa.Integer(), nullable=True),
        sa.Column("motor_power_hp_to", sa.Integer(), nullable=True),
        sa.Column("vehicle_category", sa.String(length=20), nullable=True),
        sa.Column("fuel_type", sa.String(length=20), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_pricing_rules_category_position",
        "pricing_rules",
        ["category", "position"],
    )

    op.create_table(
        "horsepower_bands",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("min_hp", sa.Integer(), nullable=False),
        sa.Column("max_hp", sa.Integer(), nullable=False),
        sa.Column("annual_price", sa.Numeric(precision=12, scale=2), nullable=False),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("horsepower_bands")
    op.drop_index("ix_pricing_rules_category_position", table_name="pricing_rules")
    op.drop_table("pricing_rules")
