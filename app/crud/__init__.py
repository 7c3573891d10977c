from .crud_promotion import promotion
from .crud_coupon import coupon
