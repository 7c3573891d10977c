import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from app.models import Coupon
from app.services.coupon_validator import check_coupon, is_coupon_valid
from app.services.errors import (
    CouponInactive, CouponExpired, CouponUsageLimitExceeded, CouponMinimumNotMet,
)

NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_coupon(**overrides) -> Coupon:
    data = {
        "code": "SAVE15",
        "tenant_id": "tenant-a",
        "discount_type": "FIXED",
        "discount_value": Decimal("15"),
        "usage_limit": None,
        "used_count": 0,
        "expiry_date": NOW + timedelta(days=1),
        "min_order_value": None,
        "active": True,
    }
    data.update(overrides)
    return Coupon(**data)


def test_valid_coupon_passes_all_checks():
    coupon = make_coupon(usage_limit=5, used_count=4, min_order_value=Decimal("100"))

    check_coupon(coupon, Decimal("100"), NOW)
    assert is_coupon_valid(coupon, Decimal("100"), NOW) is True


def test_inactive_coupon_fails():
    with pytest.raises(CouponInactive):
        check_coupon(make_coupon(active=False), Decimal("10"), NOW)


def test_coupon_expiring_exactly_now_is_expired():
    """expiry_date == now conta como expirado."""
    coupon = make_coupon(expiry_date=NOW)

    with pytest.raises(CouponExpired):
        check_coupon(coupon, Decimal("10"), NOW)
    assert is_coupon_valid(coupon, Decimal("10"), NOW) is False


def test_coupon_expiring_one_second_later_is_still_valid():
    coupon = make_coupon(expiry_date=NOW + timedelta(seconds=1))

    assert is_coupon_valid(coupon, Decimal("10"), NOW) is True


def test_used_count_equal_to_limit_fails_with_usage_limit_exceeded():
    with pytest.raises(CouponUsageLimitExceeded):
        check_coupon(make_coupon(usage_limit=3, used_count=3), Decimal("10"), NOW)


def test_minimum_not_met_reports_required_minimum():
    coupon = make_coupon(min_order_value=Decimal("100.00"))

    with pytest.raises(CouponMinimumNotMet) as excinfo:
        check_coupon(coupon, Decimal("80.00"), NOW)

    assert "100" in str(excinfo.value)
    assert excinfo.value.min_order_value == Decimal("100.00")


def test_minimum_check_is_skipped_without_order_total():
    coupon = make_coupon(min_order_value=Decimal("100.00"))

    check_coupon(coupon, None, NOW)


def test_first_failing_check_wins():
    """Inativo + expirado + esgotado: o primeiro da lista (inativo) é reportado."""
    coupon = make_coupon(
        active=False,
        expiry_date=NOW - timedelta(days=1),
        usage_limit=1,
        used_count=1,
        min_order_value=Decimal("500"),
    )
    with pytest.raises(CouponInactive):
        check_coupon(coupon, Decimal("10"), NOW)

    coupon.active = True
    with pytest.raises(CouponExpired):
        check_coupon(coupon, Decimal("10"), NOW)

    coupon.expiry_date = NOW + timedelta(days=1)
    with pytest.raises(CouponUsageLimitExceeded):
        check_coupon(coupon, Decimal("10"), NOW)
