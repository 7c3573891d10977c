# tests/conftest.py

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

# --- 1. Configurações de teste ANTES de importar a app ---
# O engine da aplicação é criado na importação, então a URL precisa estar no ambiente antes.
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from app.main import app
from app.database import Base, get_db
from app.core.config import settings
from app.services.catalog_client import get_catalog_client
from tests.utils.catalog import FakeCatalogClient

# --- 2. Configuração do Banco de Dados de Teste ---
engine = create_engine(
    settings.DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# --- 3. Fixtures do Pytest ---

@pytest.fixture(scope="function")
def db() -> Generator:
    """Fixture para criar uma sessão de banco de dados limpa para cada teste."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(scope="function")
def catalog() -> FakeCatalogClient:
    """Catálogo em memória: cada teste registra os preços de que precisa."""
    return FakeCatalogClient()

@pytest.fixture(scope="function")
def client(db: Session, catalog: FakeCatalogClient) -> Generator:
    """TestClient com as dependências do DB e do catálogo sobrescritas."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_client] = lambda: catalog

    yield TestClient(app)

    app.dependency_overrides.clear()
