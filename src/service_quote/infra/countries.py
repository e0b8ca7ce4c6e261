"""Country catalogue: currency and standard VAT rate per supported market."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from service_quote.domain.contract import CustomerType
from service_quote.domain.errors import NotFoundError
from service_quote.domain.tax import Currency, SymbolPosition, TaxConfig


@dataclass(frozen=True, slots=True)
class Country:
    code: str
    name: str
    currency: Currency
    vat_rate: Decimal

    def tax_config(self, customer_type: CustomerType = CustomerType.PRIVATE) -> TaxConfig:
        return TaxConfig(vat_rate=self.vat_rate, currency=self.currency, customer_type=customer_type)


_EUR = Currency(code="EUR", symbol="€", position=SymbolPosition.AFTER)


def _country(code: str, name: str, vat: str, currency: Currency = _EUR) -> Country:
    return Country(code=code, name=name, currency=currency, vat_rate=Decimal(vat))


COUNTRIES: tuple[Country, ...] = (
    _country("dk", "Denmark", "25", Currency("DKK", "kr.")),
    _country("se", "Sweden", "25", Currency("SEK", "kr")),
    _country("no", "Norway", "25", Currency("NOK", "kr")),
    _country("de", "Germany", "19"),
    _country("nl", "Netherlands", "21"),
    _country("be", "Belgium", "21"),
    _country("fr", "France", "20"),
    _country("es", "Spain", "21"),
    _country("it", "Italy", "22"),
    _country("pl", "Poland", "23", Currency("PLN", "zł")),
    _country("cz", "Czechia", "21", Currency("CZK", "Kč")),
    _country("at", "Austria", "20"),
    _country("ie", "Ireland", "23"),
    _country("fi", "Finland", "24"),
    _country("pt", "Portugal", "23"),
    _country("gr", "Greece", "24"),
    _country("hu", "Hungary", "27", Currency("HUF", "Ft")),
    _country("ro", "Romania", "19", Currency("RON", "lei")),
    _country("bg", "Bulgaria", "20", Currency("BGN", "лв")),
    _country("hr", "Croatia", "25"),
    _country("si", "Slovenia", "22"),
    _country("sk", "Slovakia", "20"),
    _country("ee", "Estonia", "20"),
    _country("lv", "Latvia", "21"),
    _country("lt", "Lithuania", "21"),
    _country("lu", "Luxembourg", "17"),
    _country("mt", "Malta", "18"),
    _country("cy", "Cyprus", "19"),
)

_BY_CODE = {country.code: country for country in COUNTRIES}


def find_country(code: str) -> Country:
    """
    Raises:
        NotFoundError: If no supported country has this code
    """
    country = _BY_CODE.get(code.strip().lower())
    if country is None:
        raise NotFoundError(resource="Country", identifier=code)
    return country
