from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from papernotes.shared.config import settings, STORAGE_DIR

if settings.DB_URL.startswith("sqlite"):
    STORAGE_DIR.mkdir(parents=True, exist_ok=True)
    engine = create_engine(settings.DB_URL, connect_args={"check_same_thread": False})
else:
    engine = create_engine(settings.DB_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

class Base(DeclarativeBase):
    pass

# FastAPI dep
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
