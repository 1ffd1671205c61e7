import logging
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

_DEFAULT_DB = "sqlite+aiosqlite:///./data/territorios.db"


class Settings(BaseSettings):
    APP_ENV: str = "development"
    BASE_URL: str = "http://localhost:8000"
    DATABASE_URL: str = _DEFAULT_DB
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "https://genterritorios.vercel.app",
    ]
    LOG_LEVEL: str = "INFO"
    OVERDUE_MONTHS: int = 4
    SUGGESTION_LIMIT: int = 5

    class Config:
        env_file = ".env"


settings = Settings()

if settings.APP_ENV == "production" and settings.DATABASE_URL == _DEFAULT_DB:
    logger.warning("⚠️  DATABASE_URL está com o valor padrão (SQLite): configure o PostgreSQL no .env para produção!")
