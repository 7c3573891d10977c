# app/core/config.py

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Carrega as variáveis do arquivo .env (se existir) para o ambiente
load_dotenv()

class Settings(BaseSettings):
    """
    Configurações do serviço de promoções, carregadas a partir de variáveis de ambiente.
    """
    # --- Banco de Dados ---
    DATABASE_URL: str = "sqlite:///./promo.db"

    # --- JWT (Identidade do chamador) ---
    SECRET_KEY: str = "super-secret-key-that-should-be-in-env"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # --- Serviço de Catálogo (preço base) ---
    CATALOG_SERVICE_URL: str = "http://localhost:8084"
    # Nunca esperar indefinidamente pelo catálogo
    CATALOG_TIMEOUT_SECONDS: float = 3.0

    # --- Regras de preço ---
    DEFAULT_CURRENCY: str = "USD"
    COUPON_CODE_PREFIX: str = "PROMO"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(case_sensitive=True)

# Instância única usada em toda a aplicação
settings = Settings()
