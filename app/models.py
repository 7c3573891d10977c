# app/models.py

import enum
from datetime import datetime, timezone
from sqlalchemy import (
    Column, Integer, String, Boolean, DECIMAL, DateTime, JSON, CheckConstraint
)

# Importamos a Base do nosso arquivo database.py
from .database import Base


def utcnow() -> datetime:
    """Instante atual em UTC, sem tzinfo (é assim que as datas são gravadas)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# --- ENUMS ---

class UserRole(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    SELLER = "SELLER"
    ADMIN = "ADMIN"

class DiscountType(str, enum.Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"

class PromotionType(str, enum.Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"
    # Aceito no cadastro, mas não avaliado pelo motor de preços
    BUY_X_GET_Y = "BUY_X_GET_Y"

# --- MODELOS ---

class Promotion(Base):
    __tablename__ = "promotions"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_promotions_window"),
        CheckConstraint("discount_value >= 0", name="ck_promotions_discount_value"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    # Tipos gravados como texto livre: valores desconhecidos não geram desconto
    type = Column(String(50), nullable=False)
    discount_type = Column(String(50), nullable=False)
    discount_value = Column(DECIMAL(19, 2), nullable=False)

    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False, index=True)

    # Critérios de elegibilidade: conteúdo opaco, nunca interpretado
    eligibility_criteria = Column(JSON, nullable=True)

    priority = Column(Integer, nullable=False, default=0, index=True)
    active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

class Coupon(Base):
    __tablename__ = "coupons"
    __table_args__ = (
        CheckConstraint("used_count >= 0", name="ck_coupons_used_count"),
        CheckConstraint("discount_value >= 0", name="ck_coupons_discount_value"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False, index=True)
    # Único em TODOS os tenants, não apenas dentro de um
    code = Column(String(50), nullable=False, unique=True, index=True)

    discount_type = Column(String(50), nullable=False)
    discount_value = Column(DECIMAL(19, 2), nullable=False)

    usage_limit = Column(Integer, nullable=True) # NULL = ilimitado
    used_count = Column(Integer, nullable=False, default=0)

    expiry_date = Column(DateTime, nullable=False, index=True)
    min_order_value = Column(DECIMAL(19, 2), nullable=True)
    active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
