# app/services/pricing_engine.py

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from .. import models, schemas, crud
from ..core.config import settings
from .catalog_client import CatalogClient
from .coupon_validator import is_coupon_valid
from .discount_calculator import discount_for, ZERO

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


class PricingEngine:
    def __init__(self, db: Session, catalog: CatalogClient):
        self.db = db
        self.catalog = catalog

    def get_active_promotions(self, *, tenant_id: str, product_id: str | None = None, now: datetime | None = None) -> list[models.Promotion]:
        """
        Promoções ativas do tenant, na ordem em que são aplicadas.
        Os critérios de elegibilidade não são avaliados, então `product_id` não filtra nada.
        """
        now = now or models.utcnow()
        logger.debug("Getting active promotions for product %s, tenant %s", product_id, tenant_id)
        return crud.promotion.get_active_for_tenant(self.db, tenant_id=tenant_id, now=now)

    def promotion_discount(self, promotion: models.Promotion, amount: Decimal) -> Decimal:
        if promotion.type == models.PromotionType.BUY_X_GET_Y.value:
            return ZERO
        return discount_for(promotion.discount_type, promotion.discount_value, amount)

    def calculate_price(
        self,
        *,
        tenant_id: str,
        request: schemas.PriceCalculationRequest,
        now: datetime | None = None,
    ) -> schemas.PriceCalculationResponse:
        """
        Implementa a regra de negócio para o preço final de um produto.
        1. Busca o preço base no catálogo e multiplica pela quantidade.
        2. Soma o desconto de cada promoção ativa, sempre sobre o preço base total.
        3. Se houver cupom válido, soma também o seu desconto.
        4. O preço final nunca é negativo.
        """
        now = now or models.utcnow()
        logger.debug(
            "Calculating price: product_id=%s, quantity=%s, coupon_code=%s",
            request.product_id, request.quantity, request.coupon_code,
        )

        product = self.catalog.get_product(request.product_id, tenant_id)
        total_base_price = product.price * request.quantity

        discount_amount = ZERO
        applied_promotions = []
        for promotion in self.get_active_promotions(tenant_id=tenant_id, product_id=request.product_id, now=now):
            promo_discount = self.promotion_discount(promotion, total_base_price)
            if promo_discount > 0:
                discount_amount += promo_discount
                applied_promotions.append(promotion.name)

        discount_amount += self._coupon_discount(
            tenant_id=tenant_id, code=request.coupon_code, order_total=total_base_price, now=now
        )

        # Arredonda antes de subtrair para que base - desconto = final na resposta
        total_base_price = to_money(total_base_price)
        discount_amount = to_money(discount_amount)
        final_price = max(total_base_price - discount_amount, ZERO)

        return schemas.PriceCalculationResponse(
            total_base_price=total_base_price,
            discount_amount=discount_amount,
            final_price=to_money(final_price),
            applied_promotions=applied_promotions,
            currency=product.currency or settings.DEFAULT_CURRENCY,
        )

    def _coupon_discount(self, *, tenant_id: str, code: str | None, order_total: Decimal, now: datetime) -> Decimal:
        # Aqui problemas com o cupom são ignorados: o desconto simplesmente não é aplicado
        if not code:
            return ZERO

        coupon = crud.coupon.get_by_code_and_tenant(self.db, code=code, tenant_id=tenant_id)
        if coupon is None:
            logger.info("Coupon %s not found for tenant %s, skipping", code, tenant_id)
            return ZERO
        if not is_coupon_valid(coupon, order_total, now):
            logger.info("Coupon %s is not applicable, skipping", code)
            return ZERO

        return discount_for(coupon.discount_type, coupon.discount_value, order_total)
