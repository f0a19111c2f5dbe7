"""Tests for tariff lookup, allocation and the tiered bill calculation."""
from decimal import Decimal

import pytest

from water_billing.agents.bill_calculation.allocation import calculate_allocation
from water_billing.agents.bill_calculation.calculation_engine import (
    BillingInput,
    compute_bill,
)
from water_billing.agents.bill_calculation.tariff_table import (
    DEFAULT_TARIFF_YEAR,
    TARIFFS,
    Tariff,
    get_tariff,
    supported_years,
)


class TestTariffTable:
    """Test the per-year tariff lookup."""

    def test_known_years(self):
        assert get_tariff(2026).reduced_rate == Decimal("8.508")
        assert get_tariff(2026).full_rate == Decimal("15.623")
        assert get_tariff(2025).reduced_rate == Decimal("8.314")
        assert get_tariff(2025).full_rate == Decimal("15.260")

    def test_unknown_year_falls_back_to_default(self):
        tariff = get_tariff(2019)
        assert tariff is TARIFFS[DEFAULT_TARIFF_YEAR]
        assert tariff.year == 2026

    def test_full_rate_above_reduced_rate(self):
        for tariff in TARIFFS.values():
            assert tariff.full_rate > tariff.reduced_rate > 0

    def test_rejects_inverted_rates(self):
        with pytest.raises(ValueError):
            Tariff(year=2030, reduced_rate=Decimal("10"), full_rate=Decimal("5"))

    def test_supported_years_newest_first(self):
        assert supported_years() == [2026, 2025]


class TestAllocation:
    """Test the reduced-tier allocation formula."""

    @pytest.mark.parametrize("persons, period, expected", [
        (1, 1, Decimal("3.5")),
        (1, 2, Decimal("7")),
        (4, 2, Decimal("28")),
        (3, 1, Decimal("10.5")),
    ])
    def test_per_person(self, persons, period, expected):
        assert calculate_allocation(persons, False, period) == expected

    def test_disability_bonus(self):
        assert calculate_allocation(2, True, 2) == Decimal("21")
        assert calculate_allocation(2, True, 1) == Decimal("10.5")


class TestComputeBill:
    """Test tier split, minimum charge and pricing."""

    def test_consumption_inside_allocation(self, family_of_four):
        _, result = family_of_four
        assert result.allocation == Decimal("28")
        assert result.reduced_consumption == Decimal("20")
        assert result.full_consumption == 0
        assert result.total_price == Decimal("170.16")
        assert result.minimum_charge_applied is False
        assert result.effective_consumption == Decimal("20")

    def test_minimum_charge_bi_monthly(self):
        result = compute_bill(BillingInput(consumption=1, persons=1, period_months=2, year=2026))
        assert result.minimum_charge_applied is True
        assert result.effective_consumption == Decimal("3")
        assert result.allocation == Decimal("7")
        assert result.reduced_consumption == Decimal("3")
        assert result.full_consumption == 0
        assert result.total_price == Decimal("25.524")

    def test_minimum_charge_not_applied_at_three(self):
        result = compute_bill(BillingInput(consumption=3, persons=1, period_months=2))
        assert result.minimum_charge_applied is False

    @pytest.mark.parametrize("consumption", [0, 1, "2.9"])
    def test_minimum_charge_never_monthly(self, consumption):
        result = compute_bill(BillingInput(consumption=consumption, persons=1, period_months=1))
        assert result.minimum_charge_applied is False
        assert result.effective_consumption == Decimal(str(consumption))

    def test_consumption_above_allocation(self):
        result = compute_bill(BillingInput(consumption=10, persons=1, period_months=1, year=2026))
        assert result.reduced_consumption == Decimal("3.5")
        assert result.full_consumption == Decimal("6.5")
        assert result.reduced_price == Decimal("29.778")
        assert result.full_price == Decimal("101.5495")
        assert result.total_price == Decimal("131.3275")

    def test_historical_year_pricing(self, family_of_four):
        billing_input, _ = family_of_four
        result = compute_bill(BillingInput(consumption=billing_input.consumption, persons=4,
                                           period_months=2, year=2025))
        assert result.tariff.year == 2025
        assert result.total_price == Decimal("166.28")

    def test_unknown_year_uses_default_rates(self):
        result = compute_bill(BillingInput(consumption=20, persons=4, period_months=2, year=2010))
        assert result.tariff.year == 2026
        assert result.total_price == Decimal("170.16")

    @pytest.mark.parametrize("consumption, persons, period, disability", [
        ("0", 1, 1, False),
        ("0.1", 1, 2, False),
        ("7.3", 2, 1, True),
        ("10.1", 1, 2, False),
        ("33.33", 3, 2, True),
        ("128.7", 5, 1, False),
    ])
    def test_tier_split_is_consistent(self, consumption, persons, period, disability):
        result = compute_bill(BillingInput(consumption=consumption, persons=persons,
                                           period_months=period, has_disability_benefit=disability))
        assert result.reduced_consumption + result.full_consumption == result.effective_consumption
        assert result.total_price == result.reduced_price + result.full_price
        assert result.reduced_consumption <= result.allocation
        assert result.full_consumption >= 0
        if result.effective_consumption <= result.allocation:
            assert result.full_consumption == 0

    def test_float_input_is_converted_without_binary_noise(self):
        billing_input = BillingInput(consumption=10.1, persons=1, period_months=2)
        assert billing_input.consumption == Decimal("10.1")

    def test_as_dict(self, family_of_four):
        _, result = family_of_four
        row = result.as_dict()
        assert row["tariff_year"] == 2026
        assert row["total_price"] == Decimal("170.16")
        assert row["minimum_charge_applied"] is False
