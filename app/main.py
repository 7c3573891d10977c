# app/main.py

import logging

from fastapi import FastAPI
from . import models
from .core.logging_setup import configure_logging
from .database import engine
from .routers import promotions

configure_logging()
logger = logging.getLogger(__name__)

# Cria as tabelas no banco de dados (se não existirem)
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Promo Pricing API",
    description="Promoções, cupons e cálculo de preço final por tenant."
)

app.include_router(promotions.router)

@app.get("/")
def read_root():
    """
    Endpoint raiz. Apenas confirma que a API está no ar.
    """
    return {"message": "Promo Pricing API is running"}
