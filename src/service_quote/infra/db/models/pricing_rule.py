from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from service_quote.infra.db.models.base import Base


class PricingRuleRow(Base):
    __tablename__ = "pricing_rules"
    __table_args__ = (Index("ix_pricing_rules_category_position", "category", "position"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    category: Mapped[str] = mapped_column(String(20), nullable=False)  # warranty | tires | roadside
    package_id: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2), nullable=False
    )  # annual

    car_age_months_from: Mapped[int | None] = mapped_column(Integer, nullable=True)
    car_age_months_to: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mileage_km_from: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mileage_km_to: Mapped[int | None] = mapped_column(Integer, nullable=True)
    engine_size_ccm_from: Mapped[int | None] = mapped_column(Integer, nullable=True)
    engine_size_ccm_to: Mapped[int | None] = mapped_column(Integer, nullable=True)
    motor_power_hp_from: Mapped[int | None] = mapped_column(Integer, nullable=True)
    motor_power_hp_to: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vehicle_category: Mapped[str | None] = mapped_column(String(20), nullable=True)
    fuel_type: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Declaration order within a category; the estimate fallback picks the first
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
