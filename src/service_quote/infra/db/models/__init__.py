from service_quote.infra.db.models.horsepower_band import HorsepowerBandRow
from service_quote.infra.db.models.pricing_rule import PricingRuleRow

__all__ = ["HorsepowerBandRow", "PricingRuleRow"]
