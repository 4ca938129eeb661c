import math

import pytest

from storefront.core.pricing import (
    calculate_discount_preview,
    format_money,
    parse_discount_draft,
)


def test_parse_discount_draft_normalizes_mode_and_value():
    assert parse_discount_draft("price", "1299.2").to_dict() == {"mode": "price", "value": 1299.2}
    assert parse_discount_draft("wat", "abc").to_dict() == {"mode": "percent", "value": 0}


@pytest.mark.parametrize("raw", ["", "   ", None, float("nan"), float("inf"), "Infinity"])
def test_parse_discount_draft_defaults_value_to_zero(raw):
    assert parse_discount_draft(" PRICE ", raw).to_dict() == {"mode": "price", "value": 0}


def test_percent_discount_preview():
    preview = calculate_discount_preview(2000, "percent", 25)
    assert preview.to_dict() == {
        "valid": True,
        "discountedPriceCents": 1500,
        "savingsCents": 500,
        "percentOff": 25,
    }


def test_percent_discount_preview_rounds_to_minor_units():
    preview = calculate_discount_preview(1000, "percent", 33.333)
    assert preview.valid
    assert preview.discounted_price_cents == 667
    assert preview.savings_cents == 333
    assert preview.percent_off == pytest.approx(33.3)


def test_price_discount_preview_rounds_target():
    preview = calculate_discount_preview(1000, "price", 499.5)
    assert preview.discounted_price_cents == 500
    assert preview.savings_cents == 500
    assert preview.percent_off == 50


def test_price_discount_to_zero_is_valid():
    preview = calculate_discount_preview(1000, "price", 0)
    assert preview.valid
    assert preview.discounted_price_cents == 0
    assert preview.percent_off == 100


@pytest.mark.parametrize(
    "base, mode, value",
    [
        (900, "price", 1000),
        (1000, "price", 1000),
        (1000, "price", -1),
        (1000, "percent", 0),
        (1000, "percent", 100),
        (1000, "percent", -10),
        (100, "percent", 0.01),
        (0, "percent", 10),
        (-500, "percent", 10),
        (float("nan"), "percent", 10),
        ("1000", "percent", 10),
        (None, "price", 10),
        (1000, "fixed", 10),
        (1000, "percent", float("nan")),
        (10**400, "percent", 10),
        (1000, "price", 10**400),
        (1000, "percent", -(10**400)),
    ],
)
def test_invalid_discounts_have_no_derived_fields(base, mode, value):
    assert calculate_discount_preview(base, mode, value).to_dict() == {
        "valid": False,
        "discountedPriceCents": None,
        "savingsCents": None,
        "percentOff": None,
    }


def test_valid_percent_discounts_always_lower_the_price():
    for base in (1, 99, 100, 1999, 250000):
        for percent in range(1, 100):
            preview = calculate_discount_preview(base, "percent", percent)
            if preview.valid:
                assert preview.discounted_price_cents < base
                assert preview.savings_cents > 0


@pytest.mark.parametrize("mode", ["percent", "price", "", "bogus", None, 7])
@pytest.mark.parametrize("raw", ["", "abc", "12", "-4", "1e3", float("nan"), -3, None, [], {}, 10**400, "9" * 5000])
def test_draft_then_preview_never_raises(mode, raw):
    draft = parse_discount_draft(mode, raw)
    assert math.isfinite(draft.value)
    preview = calculate_discount_preview(1500, draft.mode, draft.value)
    assert preview.valid in (True, False)


def test_format_money():
    assert format_money(1299, "usd") == "12.99 USD"
    assert format_money(123456, "eur") == "1,234.56 EUR"
