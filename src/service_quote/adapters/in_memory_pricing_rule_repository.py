from __future__ import annotations

from service_quote.domain.rules import RuleTables
from service_quote.ports.pricing_rule_repository import PricingRuleRepository


class InMemoryPricingRuleRepository(PricingRuleRepository):
    """
    Canonical contract implementation for tests.

    - Validates tables on construction and on every replacement
    - Serves the current snapshot; replacing it never touches snapshots
      already handed out
    """

    def __init__(self, tables: RuleTables) -> None:
        tables.validate()
        self._tables = tables

    def load_rule_tables(self) -> RuleTables:
        return self._tables

    def replace(self, tables: RuleTables) -> None:
        tables.validate()
        self._tables = tables
