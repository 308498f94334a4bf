"""
Application configuration settings
"""

from pydantic_settings import BaseSettings
from typing import List

_DEFAULT_JWT_SECRET = "your-super-secret-jwt-key-change-this-in-production"
_DEFAULT_AUTH_ENCRYPTION_KEY = "your-secret-auth-encryption-key-change-in-production"
_DEFAULT_DB_ENCRYPTION_KEY = "your-secret-encryption-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_HOSTS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Storage
    DATA_DIR: str = "data"
    STORE_BACKEND: str = "file"  # file, memory
    DB_ENCRYPTION_KEY: str = _DEFAULT_DB_ENCRYPTION_KEY

    # Authentication
    AUTH_BACKEND: str = "file"  # file, memory
    AUTH_ENCRYPTION_KEY: str = _DEFAULT_AUTH_ENCRYPTION_KEY
    AUTH_COOKIE_NAME: str = "auth-token"

    # JWT Configuration
    JWT_SECRET: str = _DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "7d"

    # Password hashing
    PASSWORD_SCHEME: str = "2b"  # 2b, pbkdf2-sha256
    PASSWORD_HASH_ROUNDS: int = 12

    # Bootstrap admin (documented default, rotate after first login)
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_EMAIL: str = "admin@portfolio.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create settings instance
settings = Settings()

# Refuse to run production with the shipped secrets
if settings.ENVIRONMENT == "production":
    insecure_defaults = {
        "JWT_SECRET": _DEFAULT_JWT_SECRET,
        "AUTH_ENCRYPTION_KEY": _DEFAULT_AUTH_ENCRYPTION_KEY,
        "DB_ENCRYPTION_KEY": _DEFAULT_DB_ENCRYPTION_KEY,
    }

    insecure_settings = []
    for setting, default in insecure_defaults.items():
        value = getattr(settings, setting)
        if not value or value == default:
            insecure_settings.append(setting)

    if insecure_settings:
        raise ValueError(f"Missing required production settings: {', '.join(insecure_settings)}")
