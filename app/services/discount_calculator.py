from decimal import Decimal

from ..models import DiscountType

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def parse_discount_type(kind) -> DiscountType | None:
    """Converte o tipo gravado (texto livre) no enum. Desconhecido vira None."""
    if isinstance(kind, DiscountType):
        return kind
    if not kind:
        return None
    try:
        return DiscountType(str(kind).strip().upper())
    except ValueError:
        return None


def discount_for(kind, value: Decimal, amount: Decimal) -> Decimal:
    """
    Calcula o desconto que uma única regra gera sobre `amount`.

    - PERCENTAGE: amount * value / 100
    - FIXED: min(value, amount), nunca maior que o valor descontado
    - Qualquer outro tipo: zero, sem erro
    """
    value = Decimal(value)
    amount = Decimal(amount)
    discount_type = parse_discount_type(kind)

    if discount_type is DiscountType.PERCENTAGE:
        discount = amount * value / HUNDRED
    elif discount_type is DiscountType.FIXED:
        discount = min(value, amount)
    else:
        return ZERO

    return max(discount, ZERO)
