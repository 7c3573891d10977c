# app/crud/crud_promotion.py

from sqlalchemy.orm import Session
from sqlalchemy import and_
from datetime import datetime

from .base import CRUDBase
from .. import models, schemas

class CRUDPromotion(CRUDBase[models.Promotion, schemas.PromotionCreate]):
    def get_active_for_tenant(self, db: Session, *, tenant_id: str, now: datetime) -> list[models.Promotion]:
        """
        Busca as promoções ATIVAS de um tenant no instante `now`.
        Uma promoção é ativa se `active` e se start_date <= now <= end_date.
        Ordenação: maior prioridade primeiro; empates resolvidos pelo id (mais antiga primeiro).
        """
        return (
            db.query(self.model)
            .filter(
                and_(
                    self.model.tenant_id == tenant_id,
                    self.model.active.is_(True),
                    self.model.start_date <= now,
                    self.model.end_date >= now,
                )
            )
            .order_by(self.model.priority.desc(), self.model.id.asc())
            .all()
        )

promotion = CRUDPromotion(models.Promotion)
