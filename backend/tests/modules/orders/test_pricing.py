# backend/tests/modules/orders/test_pricing.py

from decimal import Decimal

import pytest

from modules.orders.services.pricing_service import compute_item_price


class TestComputeItemPrice:
    def test_single_bread_with_toppings(self):
        price = compute_item_price(Decimal("2.5"), False, [Decimal("1.2"), Decimal("0.8")])
        assert price == Decimal("4.500")

    def test_double_bread_doubles_only_the_bread(self):
        price = compute_item_price(Decimal("2.5"), True, [Decimal("1.2"), Decimal("0.8")])
        assert price == Decimal("7.000")

    def test_no_toppings(self):
        assert compute_item_price(Decimal("3"), False, []) == Decimal("3.000")

    def test_duplicate_toppings_are_charged_each_time(self):
        assert compute_item_price(1, False, [1, 1]) == Decimal("3.000")

    def test_accepts_floats_without_binary_noise(self):
        assert compute_item_price(0.1, False, [0.2]) == Decimal("0.300")

    @pytest.mark.parametrize("double", [True, False])
    def test_never_negative_for_free_items(self, double):
        assert compute_item_price(0, double, [0, 0]) == Decimal("0.000")
