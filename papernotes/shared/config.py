# papernotes/shared/config.py
from pydantic import BaseModel
from pathlib import Path
import os

ROOT = Path(__file__).resolve().parents[2]   # project root
STORAGE_DIR = ROOT / "storage"

class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Local SQLite DB under ./storage/ unless overridden
    DB_URL: str = os.getenv("DB_URL", f"sqlite:///{(STORAGE_DIR / 'papernotes.db').as_posix()}")

    # demo auth controls
    AUTH_DEMO: bool = os.getenv("AUTH_DEMO", "true").lower() == "true"
    DEMO_TOKEN: str = os.getenv("DEMO_TOKEN", "demo")

    # JWT settings (for real mode)
    JWT_KEY: str = os.getenv("JWT_KEY", "dev-secret")
    JWT_ALG: str = os.getenv("JWT_ALG", "HS256")
    JWT_ISS: str | None = os.getenv("JWT_ISS")
    JWT_AUD: str | None = os.getenv("JWT_AUD")
    JWT_EXPIRE_MIN: int = int(os.getenv("JWT_EXPIRE_MIN", "60"))

    # Summaries: no key -> local extractive summary
    GROQ_API_KEY: str | None = os.getenv("GROQ_API_KEY") or None
    GROQ_BASE_URL: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    GROQ_MODEL: str = os.getenv("GROQ_MODEL", "llama3-8b-8192")

    MAX_TAGS: int = int(os.getenv("MAX_TAGS", "10"))

settings = Settings()
