# app/services/errors.py

from decimal import Decimal

# Exceções de negócio do serviço de promoções.
# Os routers traduzem cada uma para o HTTPException adequado.

class PromotionError(ValueError):
    """Base para erros de regra de negócio de promoções e cupons."""
    pass

class Unauthorized(PermissionError):
    pass

class TenantRequired(PromotionError):
    def __init__(self):
        super().__init__("Tenant could not be resolved for this request.")

class ProductNotFound(PromotionError):
    def __init__(self, product_id: str, reason: str | None = None):
        message = f"Product not found: {product_id}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.product_id = product_id

class CatalogUnavailable(ProductNotFound):
    """O catálogo não respondeu (timeout, erro de transporte ou 5xx)."""
    pass

class DuplicateCouponCode(PromotionError):
    def __init__(self, code: str):
        super().__init__(f"Coupon code already exists: {code}")
        self.code = code

# --- Falhas de validação de cupom, uma por verificação ---

class CouponError(PromotionError):
    pass

class InvalidCoupon(CouponError):
    def __init__(self):
        super().__init__("Invalid coupon code")

class CouponInactive(CouponError):
    def __init__(self):
        super().__init__("Coupon is not active")

class CouponExpired(CouponError):
    def __init__(self):
        super().__init__("Coupon has expired")

class CouponUsageLimitExceeded(CouponError):
    def __init__(self):
        super().__init__("Coupon usage limit exceeded")

class CouponMinimumNotMet(CouponError):
    def __init__(self, min_order_value: Decimal):
        super().__init__(f"Minimum order value not met. Required: {min_order_value}")
        self.min_order_value = min_order_value
