"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons should use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from service_quote.adapters.postgres_pricing_rule_repository import (
    PostgresPricingRuleRepository,
)
from service_quote.domain.rules import RuleTables
from service_quote.infra.db.session import get_read_session
from service_quote.ports.pricing_rule_repository import PricingRuleRepository
from service_quote.use_cases.compute_quote import ComputeQuote


def get_db() -> Generator[Session, None, None]:
    """
    Provides a read-only database session for a single request.

    Quoting never writes, so the session is rolled back and closed when the
    request ends.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_read_session() as session:
        yield session


def get_pricing_rule_repository(db: Session = Depends(get_db)) -> PricingRuleRepository:
    return PostgresPricingRuleRepository(session=db)


def get_rule_tables(
    repository: PricingRuleRepository = Depends(get_pricing_rule_repository),
) -> RuleTables:
    """
    Loads a validated rule tables snapshot for this request.

    Each request prices against one immutable snapshot, so rule edits made
    while a quote is being computed never leak into it.
    """
    return repository.load_rule_tables()


@lru_cache
def get_compute_quote_use_case() -> ComputeQuote:
    """
    Returns the ComputeQuote use case.

    Stateless (only holds the pricing policy), so a single cached instance
    is shared across requests.
    """
    return ComputeQuote()
