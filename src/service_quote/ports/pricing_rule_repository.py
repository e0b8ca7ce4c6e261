from __future__ import annotations

from abc import ABC, abstractmethod

from service_quote.domain.rules import RuleTables


class PricingRuleRepository(ABC):
    """
    Port for pricing rule reference data.

    Contract (Postconditions):
        - Returned tables have passed RuleTables.validate(); malformed rules
          are rejected here, at load time, and never reach rule matching
        - Rules keep their administrative declaration order, which the
          estimate fallback depends on
        - The returned snapshot is immutable; later edits produce new snapshots
    """

    @abstractmethod
    def load_rule_tables(self) -> RuleTables:
        """
        Load a validated snapshot of every rule table.

        Raises:
            InvalidRuleDataError: If stored rule data is malformed
        """
        ...
