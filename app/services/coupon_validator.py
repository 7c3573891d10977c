from datetime import datetime
from decimal import Decimal

from .. import models
from .errors import (
    CouponError, CouponInactive, CouponExpired,
    CouponUsageLimitExceeded, CouponMinimumNotMet,
)


def check_coupon(coupon: models.Coupon, order_total: Decimal | None, now: datetime) -> None:
    """
    Verifica se o cupom pode ser aplicado ao total `order_total` no instante `now`.
    As verificações seguem sempre esta ordem e a primeira falha é a que é levantada:

    1. Cupom ativo.
    2. Ainda não expirou (expiry_date == now já conta como expirado).
    3. Limite de uso não atingido.
    4. Valor mínimo do pedido atingido. Sem `order_total` esta verificação é ignorada.
    """
    if not coupon.active:
        raise CouponInactive()

    if coupon.expiry_date <= now:
        raise CouponExpired()

    if coupon.usage_limit is not None and coupon.used_count >= coupon.usage_limit:
        raise CouponUsageLimitExceeded()

    if (
        order_total is not None
        and coupon.min_order_value is not None
        and Decimal(order_total) < coupon.min_order_value
    ):
        raise CouponMinimumNotMet(coupon.min_order_value)


def is_coupon_valid(coupon: models.Coupon, order_total: Decimal, now: datetime) -> bool:
    try:
        check_coupon(coupon, order_total, now)
    except CouponError:
        return False
    return True
