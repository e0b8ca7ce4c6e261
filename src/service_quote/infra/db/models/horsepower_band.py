from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from service_quote.infra.db.models.base import Base


class HorsepowerBandRow(Base):
    __tablename__ = "horsepower_bands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    min_hp: Mapped[int] = mapped_column(Integer, nullable=False)
    max_hp: Mapped[int] = mapped_column(Integer, nullable=False)
    annual_price: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
