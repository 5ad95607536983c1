"""Tests for the single active coupon and its concurrency contract."""

import threading

from app.models.coupon import CouponValidationResult


class TestGenerate:
    def test_code_is_prefix_and_padded_order_number(self, store, coupon_repo):
        coupon = coupon_repo.generate(store, 5)
        assert coupon.code == "SAVE10-005"
        assert coupon.used is False
        assert coupon.generated_at_order_number == 5

    def test_large_order_numbers_are_not_truncated(self, store, coupon_repo):
        assert coupon_repo.generate(store, 1234).code == "SAVE10-1234"

    def test_custom_prefix(self, store):
        from app.repositories.coupon_repo import CouponRepository

        repo = CouponRepository(code_prefix="WELCOME")
        assert repo.generate(store, 10).code == "WELCOME-010"

    def test_replaces_active_coupon(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        coupon_repo.generate(store, 10)
        active = coupon_repo.get_active(store)
        assert active is not None
        assert active.code == "SAVE10-010"

    def test_history_keeps_every_code(self, store, coupon_repo):
        for n in (5, 10, 15):
            coupon_repo.generate(store, n)
        assert coupon_repo.list_generated(store) == [
            "SAVE10-005",
            "SAVE10-010",
            "SAVE10-015",
        ]
        assert coupon_repo.generated_count(store) == 3

    def test_only_if_newer_keeps_later_coupon(self, store, coupon_repo):
        coupon_repo.generate(store, 10)
        returned = coupon_repo.generate(store, 5, only_if_newer=True)

        assert returned.code == "SAVE10-010"
        assert coupon_repo.get_active(store).code == "SAVE10-010"
        assert coupon_repo.list_generated(store) == ["SAVE10-010"]

    def test_only_if_newer_replaces_older_coupon(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        coupon_repo.validate_and_use(store, "SAVE10-005")
        coupon_repo.generate(store, 10, only_if_newer=True)
        assert coupon_repo.is_valid(store, "SAVE10-010")

    def test_returned_coupon_is_a_copy(self, store, coupon_repo):
        coupon = coupon_repo.generate(store, 5)
        coupon.used = True
        assert coupon_repo.is_valid(store, "SAVE10-005")


class TestGetActive:
    def test_none_when_nothing_generated(self, store, coupon_repo):
        assert coupon_repo.get_active(store) is None

    def test_does_not_consume(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        coupon_repo.get_active(store)
        assert coupon_repo.get_active(store).used is False


class TestValidateAndUse:
    def test_no_active_coupon(self, store, coupon_repo):
        result = coupon_repo.validate_and_use(store, "SAVE10-005")
        assert result is CouponValidationResult.NO_ACTIVE_COUPON

    def test_valid_then_already_used(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        assert coupon_repo.validate_and_use(store, "SAVE10-005") is CouponValidationResult.VALID
        assert coupon_repo.get_active(store).used is True
        assert (
            coupon_repo.validate_and_use(store, "SAVE10-005")
            is CouponValidationResult.ALREADY_USED
        )

    def test_wrong_code(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        assert coupon_repo.validate_and_use(store, "SAVE10-010") is CouponValidationResult.INVALID_CODE
        assert coupon_repo.is_valid(store, "SAVE10-005")

    def test_no_normalization(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        for code in (" SAVE10-005", "SAVE10-005 ", "save10-005", ""):
            assert (
                coupon_repo.validate_and_use(store, code)
                is CouponValidationResult.INVALID_CODE
            )
        assert coupon_repo.is_valid(store, "SAVE10-005")

    def test_replaced_unused_coupon_is_dead(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        coupon_repo.generate(store, 10)
        assert coupon_repo.validate_and_use(store, "SAVE10-005") is CouponValidationResult.INVALID_CODE
        assert coupon_repo.validate_and_use(store, "SAVE10-010") is CouponValidationResult.VALID

    def test_used_coupon_never_revives(self, store, coupon_repo):
        coupon_repo.generate(store, 5)
        coupon_repo.validate_and_use(store, "SAVE10-005")
        coupon_repo.generate(store, 10)
        coupon_repo.validate_and_use(store, "SAVE10-010")
        assert not coupon_repo.is_valid(store, "SAVE10-005")
        assert not coupon_repo.is_valid(store, "SAVE10-010")


class TestIsValid:
    def test_mirrors_validation_without_consuming(self, store, coupon_repo):
        assert not coupon_repo.is_valid(store, "SAVE10-005")
        coupon_repo.generate(store, 5)
        assert coupon_repo.is_valid(store, "SAVE10-005")
        assert coupon_repo.is_valid(store, "SAVE10-005")
        assert not coupon_repo.is_valid(store, "SAVE10-006")
        coupon_repo.validate_and_use(store, "SAVE10-005")
        assert not coupon_repo.is_valid(store, "SAVE10-005")


class TestConcurrency:
    def test_racing_validations_yield_one_valid(self, store, coupon_repo, run_concurrently):
        coupon_repo.generate(store, 5)
        results = run_concurrently(
            [lambda: coupon_repo.validate_and_use(store, "SAVE10-005")] * 16
        )
        assert results.count(CouponValidationResult.VALID) == 1
        assert results.count(CouponValidationResult.ALREADY_USED) == 15

    def test_validation_racing_generate(self, store, coupon_repo, run_concurrently):
        coupon_repo.generate(store, 5)
        calls = [lambda: coupon_repo.validate_and_use(store, "SAVE10-005")] * 8
        calls.append(lambda: coupon_repo.generate(store, 10))
        results = run_concurrently(calls)[:-1]

        assert results.count(CouponValidationResult.VALID) <= 1
        assert set(results) <= {
            CouponValidationResult.VALID,
            CouponValidationResult.ALREADY_USED,
            CouponValidationResult.INVALID_CODE,
        }
        assert coupon_repo.get_active(store).code == "SAVE10-010"
        assert coupon_repo.get_active(store).used is False

    def test_concurrent_generate_keeps_history_complete(self, store, coupon_repo):
        threads = [
            threading.Thread(target=coupon_repo.generate, args=(store, n))
            for n in range(1, 21)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        history = coupon_repo.list_generated(store)
        assert len(history) == 20
        assert coupon_repo.get_active(store).code == history[-1]
