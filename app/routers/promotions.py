# app/routers/promotions.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from .. import schemas, auth
from ..database import get_db
from ..services.catalog_client import CatalogClient, get_catalog_client
from ..services.pricing_engine import PricingEngine
from ..services.promotion_service import PromotionService
from ..services.errors import (
    PromotionError, Unauthorized, ProductNotFound, CatalogUnavailable,
    InvalidCoupon, DuplicateCouponCode,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/promotion",
    tags=["Promotions"]
)

def get_pricing_engine(
    db: Session = Depends(get_db),
    catalog: CatalogClient = Depends(get_catalog_client),
) -> PricingEngine:
    return PricingEngine(db=db, catalog=catalog)

def get_promotion_service(db: Session = Depends(get_db)) -> PromotionService:
    return PromotionService(db=db)

def to_http_exception(error: Exception) -> HTTPException:
    """Traduz as exceções de negócio para o erro HTTP correspondente."""
    if isinstance(error, Unauthorized):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, CatalogUnavailable):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))
    if isinstance(error, (ProductNotFound, InvalidCoupon)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, DuplicateCouponCode):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

@router.post("/calculate", response_model=schemas.PriceCalculationResponse)
def calculate_price(
    price_request: schemas.PriceCalculationRequest,
    tenant_id: str = Depends(auth.get_tenant_id),
    pricing_engine: PricingEngine = Depends(get_pricing_engine),
):
    """
    Calcula o preço final de um produto com as promoções ativas e o cupom (opcional).

    - **Público**: usado pelo carrinho e pelo checkout.
    - Cupons inválidos são ignorados aqui; use `/coupon/validate` para saber o motivo.
    """
    logger.info("Calculating price: product_id=%s, quantity=%s", price_request.product_id, price_request.quantity)
    try:
        return pricing_engine.calculate_price(tenant_id=tenant_id, request=price_request)
    except ProductNotFound as e:
        raise to_http_exception(e)

@router.post("", response_model=schemas.Promotion, status_code=status.HTTP_201_CREATED)
def create_promotion(
    promotion_in: schemas.PromotionCreate,
    identity: schemas.Identity = Depends(auth.get_current_identity),
    service: PromotionService = Depends(get_promotion_service),
):
    """
    Cria uma nova regra promocional para o tenant do chamador.

    - **Protegido**: apenas SELLER e ADMIN.
    """
    logger.info("Creating promotion: name=%s", promotion_in.name)
    try:
        return service.create_promotion(identity=identity, promotion_in=promotion_in)
    except (Unauthorized, PromotionError) as e:
        raise to_http_exception(e)

@router.post("/coupon/validate", response_model=schemas.Coupon)
def validate_coupon(
    coupon_request: schemas.CouponValidationRequest,
    tenant_id: str = Depends(auth.get_tenant_id),
    service: PromotionService = Depends(get_promotion_service),
):
    """
    Valida um código de cupom e devolve os seus dados.
    Cada falha (inativo, expirado, esgotado, mínimo não atingido) gera uma mensagem própria.

    - **Público**
    """
    logger.info("Validating coupon: code=%s", coupon_request.coupon_code)
    try:
        return service.validate_coupon(tenant_id=tenant_id, request=coupon_request)
    except PromotionError as e:
        raise to_http_exception(e)

@router.post("/coupon", response_model=schemas.Coupon, status_code=status.HTTP_201_CREATED)
def create_coupon(
    coupon_in: schemas.CouponCreate,
    identity: schemas.Identity = Depends(auth.get_current_identity),
    service: PromotionService = Depends(get_promotion_service),
):
    """
    Cria um cupom. Se `code` não for enviado, um código é gerado.

    - **Protegido**: apenas SELLER e ADMIN.
    - Códigos são únicos entre todos os tenants (409 se já existir).
    """
    logger.info("Creating coupon: code=%s", coupon_in.code)
    try:
        return service.create_coupon(identity=identity, coupon_in=coupon_in)
    except (Unauthorized, PromotionError) as e:
        raise to_http_exception(e)

@router.post("/coupon/redeem", response_model=schemas.Coupon)
def redeem_coupon(
    coupon_request: schemas.CouponValidationRequest,
    identity: schemas.Identity = Depends(auth.get_current_identity),
    tenant_id: str = Depends(auth.get_tenant_id),
    service: PromotionService = Depends(get_promotion_service),
):
    """
    Consome um uso do cupom (chamado pelo checkout ao concluir a compra).

    - **Protegido**: qualquer chamador autenticado.
    """
    logger.info("Redeeming coupon: code=%s", coupon_request.coupon_code)
    try:
        return service.redeem_coupon(identity=identity, tenant_id=tenant_id, request=coupon_request)
    except (Unauthorized, PromotionError) as e:
        raise to_http_exception(e)

@router.get("/product/{product_id}/active", response_model=List[schemas.Promotion])
def read_active_promotions(
    product_id: str,
    tenant_id: str = Depends(auth.get_tenant_id),
    pricing_engine: PricingEngine = Depends(get_pricing_engine),
):
    """
    Lista as promoções ativas agora, na ordem em que seriam aplicadas.

    - **Público**: usado para exibir selos de promoção no produto.
    """
    return pricing_engine.get_active_promotions(tenant_id=tenant_id, product_id=product_id)
