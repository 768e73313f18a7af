# config/settings.py

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import os
import warnings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Cre8Kids"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if not self.is_production else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    # Database
    DATABASE_URL: str = "sqlite:///./cre8kids.db"
    DB_POOL_SIZE: int = Field(default=20, ge=5, le=100)
    DB_MAX_OVERFLOW: int = Field(default=30, ge=5, le=100)
    DB_POOL_RECYCLE: int = Field(default=3600, ge=300)

    # Security
    SECRET_KEY: str = Field(default="cre8kids-dev-secret-change-me", min_length=8)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(default=7, ge=1, le=90)
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=16)
    EMAIL_VERIFICATION_EXPIRE_HOURS: int = Field(default=24, ge=1)
    PASSWORD_RESET_EXPIRE_MINUTES: int = Field(default=60, ge=5)

    # Password policy
    MIN_PASSWORD_LENGTH: int = Field(default=6, ge=6, le=128)

    # Progress
    STREAK_WINDOW_DAYS: int = Field(default=30, ge=1, le=365)
    SEED_DEMO_DATA: bool = False

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    PORT: Optional[int] = Field(default=8000, ge=1, le=65535)

    @field_validator('SECRET_KEY')
    @classmethod
    def validate_secret(cls, v):
        """Warn about signing secrets too short for production"""
        if len(v) < 32:
            warnings.warn(f"Secret key is only {len(v)} characters. Consider using at least 32 characters for production.", UserWarning)
        return v

    @field_validator('DATABASE_URL')
    @classmethod
    def validate_database_url(cls, v):
        """Validate database URL format"""
        if not v.startswith(('sqlite://', 'postgresql://', 'postgresql+psycopg2://')):
            raise ValueError('Unsupported database URL format')
        return v

    @field_validator('CORS_ORIGINS')
    @classmethod
    def validate_cors_origins(cls, v):
        """Validate CORS origins in production"""
        environment = os.getenv('ENVIRONMENT', 'development')
        if environment == 'production' and ('*' in v or not v):
            raise ValueError('Wildcard CORS origins not allowed in production')
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.ENVIRONMENT == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
