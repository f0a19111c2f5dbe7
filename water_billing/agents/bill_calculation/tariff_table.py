"""
tariff_table.py
---------------
💧 Residential water tariffs per calendar year.

Purpose:
--------
Holds the two-tier residential tariff (reduced rate inside the household
allocation, full rate above it) for every supported year. Prices are in
NIS per cubic meter and already include VAT.

A year without an entry resolves to the default (most current) year, so a
price can always be produced. Tariffs for older years are genuinely
unknown; callers that need to know whether the fallback was used can check
`tariff.year`.

Depends On:
-----------
- water_billing.utils.logger
"""

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import List

from water_billing.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Tariff:
    year: int
    reduced_rate: Decimal
    full_rate: Decimal

    def __post_init__(self):
        if not (self.full_rate > self.reduced_rate > 0):
            raise ValueError(
                f"Invalid tariff for {self.year}: expected full_rate > reduced_rate > 0"
            )


DEFAULT_TARIFF_YEAR = 2026

TARIFFS = MappingProxyType({
    2026: Tariff(year=2026, reduced_rate=Decimal("8.508"), full_rate=Decimal("15.623")),
    # 7.046 / 12.932 before 18% VAT
    2025: Tariff(year=2025, reduced_rate=Decimal("8.314"), full_rate=Decimal("15.260")),
})


def get_tariff(year: int) -> Tariff:
    """
    Returns the tariff for `year`, or the default-year tariff when the
    year is not in the table.
    """
    tariff = TARIFFS.get(year)
    if tariff is None:
        logger.debug(f"No tariff for {year}; using {DEFAULT_TARIFF_YEAR} rates.")
        return TARIFFS[DEFAULT_TARIFF_YEAR]
    return tariff


def supported_years() -> List[int]:
    """Years with a published tariff, newest first."""
    return sorted(TARIFFS, reverse=True)
