# tests/integration/test_crud.py

from datetime import timedelta
from sqlalchemy.orm import Session

from app import crud, models
from tests.utils.promotion import create_random_promotion, create_random_coupon


def test_active_promotions_respect_window_flag_and_tenant(db: Session):
    running = create_random_promotion(db, tenant_id="tenant-a", name="Running")
    create_random_promotion(db, tenant_id="tenant-a", name="Future", starts_in_days=1, ends_in_days=5)
    create_random_promotion(db, tenant_id="tenant-a", name="Finished", starts_in_days=-10, ends_in_days=-1)
    create_random_promotion(db, tenant_id="tenant-a", name="Disabled", active=False)
    create_random_promotion(db, tenant_id="tenant-b", name="Other Tenant")

    active = crud.promotion.get_active_for_tenant(db, tenant_id="tenant-a", now=models.utcnow())

    assert [p.id for p in active] == [running.id]
    assert crud.promotion.get(db, id=running.id).name == "Running"


def test_window_bounds_are_inclusive(db: Session):
    promotion = create_random_promotion(db, tenant_id="tenant-a")

    at_start = crud.promotion.get_active_for_tenant(db, tenant_id="tenant-a", now=promotion.start_date)
    at_end = crud.promotion.get_active_for_tenant(db, tenant_id="tenant-a", now=promotion.end_date)
    after_end = crud.promotion.get_active_for_tenant(
        db, tenant_id="tenant-a", now=promotion.end_date + timedelta(seconds=1)
    )

    assert [p.id for p in at_start] == [promotion.id]
    assert [p.id for p in at_end] == [promotion.id]
    assert after_end == []


def test_active_promotions_ordered_by_priority_then_id(db: Session):
    low = create_random_promotion(db, tenant_id="tenant-a", priority=1)
    high_first = create_random_promotion(db, tenant_id="tenant-a", priority=10)
    high_second = create_random_promotion(db, tenant_id="tenant-a", priority=10)

    active = crud.promotion.get_active_for_tenant(db, tenant_id="tenant-a", now=models.utcnow())

    assert [p.id for p in active] == [high_first.id, high_second.id, low.id]


def test_coupon_lookups(db: Session):
    coupon = create_random_coupon(db, tenant_id="tenant-a", code="SPRING5")

    assert crud.coupon.get_by_code(db, code="SPRING5").id == coupon.id
    assert crud.coupon.get_by_code_and_tenant(db, code="SPRING5", tenant_id="tenant-a").id == coupon.id
    assert crud.coupon.get_by_code_and_tenant(db, code="SPRING5", tenant_id="tenant-b") is None
    assert crud.coupon.exists_by_code(db, code="SPRING5") is True
    assert crud.coupon.exists_by_code(db, code="AUTUMN5") is False


def test_consume_stops_at_usage_limit(db: Session):
    coupon = create_random_coupon(db, tenant_id="tenant-a", usage_limit=2, used_count=1)

    assert crud.coupon.consume(db, db_obj=coupon) is True
    db.commit()
    assert crud.coupon.consume(db, db_obj=coupon) is False
    db.commit()

    db.refresh(coupon)
    assert coupon.used_count == 2


def test_consume_without_limit_always_increments(db: Session):
    coupon = create_random_coupon(db, tenant_id="tenant-a", usage_limit=None)

    for _ in range(3):
        assert crud.coupon.consume(db, db_obj=coupon) is True
    db.commit()

    db.refresh(coupon)
    assert coupon.used_count == 3
