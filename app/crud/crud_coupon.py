# app/crud/crud_coupon.py

from sqlalchemy.orm import Session
from sqlalchemy import and_, or_, update

from .base import CRUDBase
from .. import models, schemas

class CRUDCoupon(CRUDBase[models.Coupon, schemas.CouponCreate]):
    def get_by_code(self, db: Session, *, code: str) -> models.Coupon | None:
        """Busca um cupom pelo código, em qualquer tenant."""
        return db.query(self.model).filter(self.model.code == code).first()

    def get_by_code_and_tenant(self, db: Session, *, code: str, tenant_id: str) -> models.Coupon | None:
        return (
            db.query(self.model)
            .filter(and_(self.model.code == code, self.model.tenant_id == tenant_id))
            .first()
        )

    def exists_by_code(self, db: Session, *, code: str) -> bool:
        return db.query(self.model.id).filter(self.model.code == code).first() is not None

    def consume(self, db: Session, *, db_obj: models.Coupon) -> bool:
        """
        Incrementa used_count de forma atômica, apenas se o limite de uso permitir.
        Retorna False se outra transação consumiu o último uso antes desta. Não faz commit.
        """
        stmt = (
            update(self.model)
            .where(
                self.model.id == db_obj.id,
                or_(
                    self.model.usage_limit.is_(None),
                    self.model.used_count < self.model.usage_limit,
                ),
            )
            .values(used_count=self.model.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        return result.rowcount == 1

coupon = CRUDCoupon(models.Coupon)
