# app/services/promotion_service.py

import logging
import secrets
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas, crud
from ..core.config import settings
from .coupon_validator import check_coupon
from .errors import (
    Unauthorized, TenantRequired, DuplicateCouponCode,
    InvalidCoupon, CouponUsageLimitExceeded,
)

logger = logging.getLogger(__name__)

MANAGER_ROLES = (models.UserRole.SELLER.value, models.UserRole.ADMIN.value)


def generate_coupon_code() -> str:
    """Prefixo fixo + 8 caracteres hexadecimais aleatórios, em maiúsculas."""
    return f"{settings.COUPON_CODE_PREFIX}{secrets.token_hex(4)}".upper()


class PromotionService:
    def __init__(self, db: Session):
        self.db = db

    def _require_manager(self, identity: schemas.Identity, action: str) -> str:
        if not identity.has_any_role(*MANAGER_ROLES):
            raise Unauthorized(f"Only SELLER and ADMIN roles can create {action}")
        if not identity.tenant_id:
            raise TenantRequired()
        return identity.tenant_id

    def create_promotion(self, *, identity: schemas.Identity, promotion_in: schemas.PromotionCreate) -> models.Promotion:
        tenant_id = self._require_manager(identity, "promotions")
        logger.debug("Creating promotion: tenant_id=%s, name=%s", tenant_id, promotion_in.name)

        data = promotion_in.model_dump()
        # Enums são gravados pelo seu valor textual
        data["type"] = promotion_in.type.value
        data["discount_type"] = promotion_in.discount_type.value

        try:
            db_promotion = crud.promotion.create(self.db, obj_in=data, tenant_id=tenant_id, active=True)
        except Exception:
            self.db.rollback()
            raise

        logger.info("Promotion %s created for tenant %s", db_promotion.id, tenant_id)
        return db_promotion

    def create_coupon(self, *, identity: schemas.Identity, coupon_in: schemas.CouponCreate) -> models.Coupon:
        tenant_id = self._require_manager(identity, "coupons")
        logger.debug("Creating coupon: tenant_id=%s, code=%s", tenant_id, coupon_in.code)

        code = coupon_in.code or generate_coupon_code()
        # Códigos são únicos entre TODOS os tenants
        if crud.coupon.exists_by_code(self.db, code=code):
            raise DuplicateCouponCode(code)

        data = coupon_in.model_dump()
        data["code"] = code
        data["discount_type"] = coupon_in.discount_type.value

        try:
            db_coupon = crud.coupon.create(self.db, obj_in=data, tenant_id=tenant_id, used_count=0, active=True)
        except IntegrityError as e:
            # Outra requisição gravou o mesmo código entre a verificação e o insert
            self.db.rollback()
            raise DuplicateCouponCode(code) from e

        logger.info("Coupon %s created for tenant %s", db_coupon.code, tenant_id)
        return db_coupon

    def validate_coupon(
        self,
        *,
        tenant_id: str,
        request: schemas.CouponValidationRequest,
        now: datetime | None = None,
    ) -> models.Coupon:
        """
        Validação explícita: ao contrário do cálculo de preço, cada falha
        levanta um erro específico para o chamador exibir.
        """
        logger.debug("Validating coupon: code=%s, tenant_id=%s", request.coupon_code, tenant_id)
        coupon = crud.coupon.get_by_code_and_tenant(self.db, code=request.coupon_code, tenant_id=tenant_id)
        if coupon is None:
            raise InvalidCoupon()

        check_coupon(coupon, request.order_total, now or models.utcnow())
        return coupon

    def redeem_coupon(
        self,
        *,
        identity: schemas.Identity,
        tenant_id: str,
        request: schemas.CouponValidationRequest,
        now: datetime | None = None,
    ) -> models.Coupon:
        """
        Consome um uso do cupom. Valida como `validate_coupon` e depois incrementa
        used_count com um UPDATE condicional, seguro contra resgates concorrentes.
        """
        if not identity.user_id:
            raise Unauthorized("Authentication is required to redeem coupons")

        coupon = self.validate_coupon(tenant_id=tenant_id, request=request, now=now)

        try:
            consumed = crud.coupon.consume(self.db, db_obj=coupon)
        except Exception:
            self.db.rollback()
            raise

        if not consumed:
            # Outro resgate levou o último uso disponível
            self.db.rollback()
            raise CouponUsageLimitExceeded()

        self.db.commit()
        self.db.refresh(coupon)
        logger.info("Coupon %s redeemed by user %s (used %s)", coupon.code, identity.user_id, coupon.used_count)
        return coupon
