"""Tests for admin statistics and manual coupon generation."""

from decimal import Decimal

import pytest

from app.core.exceptions import CouponNotFoundError


class TestStatistics:
    def test_empty_store(self, store, admin_service):
        stats = admin_service.get_statistics(store)
        assert stats.total_items_purchased == 0
        assert stats.total_purchase_amount == Decimal("0")
        assert stats.total_discount_amount == Decimal("0")
        assert stats.total_orders == 0
        assert stats.orders_with_coupons == 0
        assert stats.total_coupons_generated == 0
        assert stats.active_coupon is None

    def test_rollups_after_orders(self, store, admin_service, place_order, make_item):
        item = make_item(price="100.00", stock=100)
        for i in range(5):
            place_order(f"user-{i}", item, quantity=2)
        place_order("lucky", item, quantity=1, coupon_code="SAVE10-005")

        stats = admin_service.get_statistics(store)

        assert stats.total_orders == 6
        assert stats.total_items_purchased == 11
        assert stats.total_purchase_amount == Decimal("1090.00")
        assert stats.total_discount_amount == Decimal("10.00")
        assert stats.orders_with_coupons == 1
        assert stats.total_coupons_generated == 1
        assert stats.active_coupon == "SAVE10-005"


class TestCoupons:
    def test_active_coupon_missing(self, store, admin_service):
        with pytest.raises(CouponNotFoundError):
            admin_service.get_active_coupon(store)

    def test_manual_generation_uses_order_count(self, store, admin_service, place_order, make_item):
        item = make_item(stock=10)
        for i in range(3):
            place_order(f"user-{i}", item)

        coupon = admin_service.generate_coupon(store)

        assert coupon.code == "SAVE10-003"
        assert coupon.generated_at_order_number == 3
        assert coupon.used is False
        assert admin_service.get_active_coupon(store).code == "SAVE10-003"

    def test_manual_generation_replaces_active(self, store, admin_service, coupon_repo):
        coupon_repo.generate(store, 5)
        admin_service.generate_coupon(store)
        assert not coupon_repo.is_valid(store, "SAVE10-005")
        assert admin_service.get_active_coupon(store).code == "SAVE10-000"

    def test_list_coupons(self, store, admin_service, coupon_repo):
        coupon_repo.generate(store, 5)
        coupon_repo.generate(store, 10)
        listing = admin_service.list_coupons(store)
        assert listing.coupons == ["SAVE10-005", "SAVE10-010"]
        assert listing.count == 2
