from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .core.config import settings

# SQLite precisa deste argumento para ser usado por várias threads do servidor
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Cria o "motor" (engine) do SQLAlchemy
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

# Cria uma "fábrica" de sessões (SessionLocal)
# Esta sessão será usada em cada pedido (request) à API
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
# Cria uma classe Base para nossos modelos (ORM)
Base = declarative_base()
