from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./warehouse.db"

    # Database Connection Pool Settings (ignored for SQLite)
    DB_POOL_SIZE: int = 10  # Base number of connections in pool
    DB_MAX_OVERFLOW: int = 20  # Extra connections allowed beyond pool_size
    DB_POOL_TIMEOUT: int = 30  # Seconds to wait for connection from pool
    DB_POOL_RECYCLE: int = 1800  # Recycle connections after 30 minutes

    # Session token settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_DAYS: int = 1
    REMEMBER_ME_EXPIRE_DAYS: int = 30
    SESSION_COOKIE_NAME: str = "warehouse_session"
    SESSION_COOKIE_SECURE: bool = False  # Set to True behind HTTPS
    BCRYPT_ROUNDS: int = 12

    # App Settings
    APP_NAME: str = "Warehouse Operations"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - accepts JSON string, comma-separated, or list
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5137",
        "http://localhost:5173",
    ]

    # Warehouse defaults
    DEFAULT_ITEM_LOCATION: str = "Warehouse"  # Where items return when a shipment is deleted
    LOW_STOCK_THRESHOLD: int = 10
    STOCK_MOVEMENT_WINDOW_DAYS: int = 7

    # Bootstrap admin (created only when the workers table is empty)
    SEED_ADMIN_ON_STARTUP: bool = True
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "Admin@123"
    ADMIN_EMAIL: str = "admin@warehouse.com"

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        return list(self.CORS_ORIGINS)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
