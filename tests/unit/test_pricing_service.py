"""
Unit tests for line pricing.
"""

import pytest
from pos_api.models import DiscountType
from pos_api.services.pricing_service import compute_price


class TestPercentageDiscount:
    """PERCENTAGE discounts are clamped and floored."""

    def test_simple_percentage(self):
        price = compute_price(1000, DiscountType.PERCENTAGE, 10)
        assert price.discount_amount == 100
        assert price.sale_price == 900

    def test_value_above_hundred_is_clamped(self):
        price = compute_price(1000, DiscountType.PERCENTAGE, 150)
        assert price.discount_value == 100
        assert price.discount_amount == 1000
        assert price.sale_price == 0

    def test_negative_value_is_clamped_to_zero(self):
        price = compute_price(1000, DiscountType.PERCENTAGE, -20)
        assert price.discount_value == 0
        assert price.discount_amount == 0
        assert price.sale_price == 1000

    def test_amount_is_floored(self):
        # 15% of 999 = 149.85
        price = compute_price(999, DiscountType.PERCENTAGE, 15)
        assert price.discount_amount == 149
        assert price.sale_price == 850

    def test_accepts_plain_string_type(self):
        price = compute_price(200, 'PERCENTAGE', 50)
        assert price.sale_price == 100

    @pytest.mark.parametrize('base_price', [0, 1, 37, 999, 1000, 123457])
    @pytest.mark.parametrize('value', [-5, 0, 1, 33, 99, 100, 101, 250])
    def test_invariants_hold(self, base_price, value):
        price = compute_price(base_price, DiscountType.PERCENTAGE, value)
        clamped = min(max(value, 0), 100)
        assert price.discount_value == clamped
        assert price.discount_amount == (clamped * base_price) // 100
        assert 0 <= price.discount_amount <= base_price
        assert price.sale_price == base_price - price.discount_amount


class TestFixedDiscount:
    """FIXED discounts are applied as given."""

    def test_fixed_zero(self):
        price = compute_price(1000, DiscountType.FIXED, 0)
        assert price.discount_amount == 0
        assert price.sale_price == 1000

    def test_fixed_amount(self):
        price = compute_price(1000, DiscountType.FIXED, 250)
        assert price.discount_amount == 250
        assert price.sale_price == 750

    def test_fixed_larger_than_base_goes_negative(self):
        price = compute_price(500, DiscountType.FIXED, 700)
        assert price.discount_amount == 700
        assert price.sale_price == -200

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            compute_price(500, 'BOGO', 1)
