# app/crud/base.py

from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session
from ..database import Base

# Define tipos genéricos para o nosso Modelo SQLAlchemy e Schema Pydantic de criação
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

class CRUDBase(Generic[ModelType, CreateSchemaType]):
    """
    Classe base para operações de leitura e criação com tipos genéricos para
    um modelo SQLAlchemy e um schema de criação.
    Promoções e cupons são imutáveis depois de criados, por isso não há update/remove.
    """
    def __init__(self, model: Type[ModelType]):
        """
        Construtor da classe CRUD.

        :param model: A classe do modelo SQLAlchemy (ex: models.Promotion)
        """
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """Busca um único objeto pelo seu ID."""
        return db.query(self.model).filter(self.model.id == id).first()

    def create(
        self,
        db: Session,
        *,
        obj_in: Union[CreateSchemaType, Dict[str, Any]],
        **extra: Any
    ) -> ModelType:
        """Cria um novo objeto no banco. `extra` completa campos que não vêm do schema (ex: tenant_id)."""
        if isinstance(obj_in, dict):
            obj_in_data = dict(obj_in)
        else:
            obj_in_data = obj_in.model_dump()
        obj_in_data.update(extra)
        db_obj = self.model(**obj_in_data)  # Desempacota o dict no construtor do modelo
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj
