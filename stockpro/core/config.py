"""
StockPro - Configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import secrets
from pathlib import Path
from dotenv import load_dotenv

# Carrega .env da raiz do projeto antes de instanciar Settings
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "StockPro"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./stockpro.db"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    LOGIN_RATE_LIMIT: str = "10/minute"

    # Admin inicial (POST /api/auth/setup)
    ADMIN_NAME: str = "Administrador"
    ADMIN_EMAIL: str = "admin@stockpro.com"
    ADMIN_PASSWORD: str = "change-me-in-production"

    # CORS
    CORS_ORIGINS: list = ["*"]

    # Uploads de imagens das encomendas
    UPLOADS_DIR: str = "uploads"
    MAX_ORDER_IMAGES: int = 10
    MAX_IMAGE_SIZE_MB: int = 10

    # Email Settings (SMTP) - notificacao de erros
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM_EMAIL: str = "noreply@stockpro.com"
    SMTP_FROM_NAME: str = "StockPro"
    SMTP_TLS: bool = True
    ERROR_NOTIFY_EMAIL: Optional[str] = None

    class Config:
        extra = "ignore"
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
