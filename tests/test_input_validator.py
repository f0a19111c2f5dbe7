"""Tests for parsing raw household values into billing inputs."""
from decimal import Decimal

import pytest

from water_billing.agents.error_detection.findings import BillingBasis
from water_billing.agents.validation.input_validator import (
    InvalidBillingInput,
    parse_billing_input,
    parse_bool,
    parse_detection_options,
)


def _raw(**overrides):
    raw = {
        "consumption": "20",
        "persons": "4",
        "period_months": "2",
        "has_disability_benefit": "false",
        "year": "2026",
    }
    raw.update(overrides)
    return raw


class TestParseBillingInput:

    def test_form_strings(self):
        billing_input = parse_billing_input(_raw())
        assert billing_input.consumption == Decimal("20")
        assert billing_input.persons == 4
        assert billing_input.period_months == 2
        assert billing_input.has_disability_benefit is False
        assert billing_input.year == 2026

    def test_numeric_values_from_spreadsheet(self):
        billing_input = parse_billing_input(_raw(consumption=12.5, persons=3.0, period_months=1,
                                                 has_disability_benefit=True, year=2025))
        assert billing_input.consumption == Decimal("12.5")
        assert billing_input.persons == 3
        assert billing_input.has_disability_benefit is True
        assert billing_input.year == 2025

    def test_missing_year_defaults_to_current_tariff(self):
        raw = _raw()
        del raw["year"]
        assert parse_billing_input(raw).year == 2026
        assert parse_billing_input(_raw(year="")).year == 2026
        assert parse_billing_input(_raw(year=float("nan"))).year == 2026

    @pytest.mark.parametrize("year", ["abc", "20x6", "2025.5"])
    def test_unparsable_year_is_rejected(self, year):
        with pytest.raises(InvalidBillingInput) as excinfo:
            parse_billing_input(_raw(year=year))
        assert excinfo.value.field == "year"

    @pytest.mark.parametrize("field, value", [
        ("consumption", "-1"),
        ("consumption", "abc"),
        ("consumption", None),
        ("consumption", float("nan")),
        ("persons", "0"),
        ("persons", "2.5"),
        ("persons", ""),
        ("period_months", "3"),
        ("has_disability_benefit", "maybe"),
    ])
    def test_rejects_invalid_required_values(self, field, value):
        with pytest.raises(InvalidBillingInput) as excinfo:
            parse_billing_input(_raw(**{field: value}))
        assert excinfo.value.field == field

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_billing_input(_raw(consumption="-5"))


class TestParseBool:

    @pytest.mark.parametrize("value", [True, "true", "Yes", "1", "on", 1])
    def test_truthy(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", [False, "false", "No", "0", "", None, 0, float("nan")])
    def test_falsy(self, value):
        assert parse_bool(value) is False


class TestParseDetectionOptions:

    def test_all_supplied(self):
        options = parse_detection_options({
            "actual_bill_amount": "200",
            "previous_consumption": "10",
            "current_meter_reading": "1,532.4",
            "billing_basis": " Estimated ",
        })
        assert options.actual_bill_amount == Decimal("200")
        assert options.previous_consumption == Decimal("10")
        assert options.current_meter_reading == Decimal("1532.4")
        assert options.billing_basis == BillingBasis.ESTIMATED

    def test_blank_and_unparsable_values_are_not_supplied(self):
        options = parse_detection_options({
            "actual_bill_amount": "",
            "previous_consumption": float("nan"),
            "current_meter_reading": "n/a",
            "billing_basis": float("nan"),
        })
        assert options.actual_bill_amount is None
        assert options.previous_consumption is None
        assert options.current_meter_reading is None
        assert options.billing_basis is None

    def test_unknown_billing_basis(self):
        with pytest.raises(InvalidBillingInput):
            parse_detection_options({"billing_basis": "guessed"})
