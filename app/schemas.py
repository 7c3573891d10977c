from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from .models import DiscountType, PromotionType
from typing import Any, List, Optional
from datetime import datetime, timezone
from decimal import Decimal


def _as_naive_utc(value: datetime) -> datetime:
    # Datas com fuso são convertidas para UTC; datas "naive" já são tratadas como UTC
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

def normalize_coupon_code(code: str | None) -> str | None:
    if code is None:
        return None
    code = code.strip().upper()
    return code or None

# --- Identidade do chamador (já resolvida a partir do token) ---

class Identity(BaseModel):
    user_id: str | None = None
    tenant_id: str | None = None
    roles: List[str] = []

    def has_any_role(self, *roles: str) -> bool:
        return any(role in self.roles for role in roles)

# --- Schemas de Promoções ---

class PromotionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: PromotionType
    discount_type: DiscountType
    discount_value: Decimal = Field(..., ge=0)
    start_date: datetime
    end_date: datetime
    eligibility_criteria: Optional[Any] = None # Conteúdo opaco
    priority: int = 0

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, value):
        # "priority": null é tratado como ausente
        return 0 if value is None else value

class PromotionCreate(PromotionBase):
    @field_validator("start_date", "end_date")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return _as_naive_utc(value)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

# Schema para exibir a promoção (incluindo o ID e o tenant)
class Promotion(BaseModel):
    id: int
    tenant_id: str
    name: str
    type: str
    discount_type: str
    discount_value: Decimal
    start_date: datetime
    end_date: datetime
    eligibility_criteria: Optional[Any] = None
    priority: int
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

# --- Schemas de Cupons ---

class CouponCreate(BaseModel):
    code: Optional[str] = Field(None, max_length=50) # Gerado automaticamente se ausente
    discount_type: DiscountType
    discount_value: Decimal = Field(..., ge=0)
    usage_limit: Optional[int] = Field(None, ge=0)
    expiry_date: datetime
    min_order_value: Optional[Decimal] = Field(None, ge=0)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str | None) -> str | None:
        return normalize_coupon_code(value)

    @field_validator("expiry_date")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return _as_naive_utc(value)

class Coupon(BaseModel):
    id: int
    tenant_id: str
    code: str
    discount_type: str
    discount_value: Decimal
    usage_limit: Optional[int] = None
    used_count: int
    expiry_date: datetime
    min_order_value: Optional[Decimal] = None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class CouponValidationRequest(BaseModel):
    coupon_code: str = Field(..., min_length=1, max_length=50)
    order_total: Optional[Decimal] = Field(None, ge=0)
    item_ids: Optional[List[str]] = None # Aceito, mas não avaliado

    @field_validator("coupon_code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        code = normalize_coupon_code(value)
        if code is None:
            raise ValueError("coupon_code must not be blank")
        return code

# --- Schemas de Cálculo de Preço ---

class PriceCalculationRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, description="Quantity must be at least one")
    coupon_code: Optional[str] = None

    @field_validator("coupon_code")
    @classmethod
    def normalize_code(cls, value: str | None) -> str | None:
        return normalize_coupon_code(value)

class PriceCalculationResponse(BaseModel):
    total_base_price: Decimal
    discount_amount: Decimal
    final_price: Decimal
    applied_promotions: List[str] = []
    currency: str

# Resposta do catálogo, apenas o que o motor de preços precisa
class CatalogProduct(BaseModel):
    product_id: str
    price: Decimal
    currency: Optional[str] = None
