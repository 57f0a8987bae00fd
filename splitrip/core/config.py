"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at process start (see ``create_app``) and handed to every
    component that needs it.
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "Splitrip"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./data/splitrip.sqlite"
    DB_ECHO: bool = False

    # JWT
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:5500", "http://127.0.0.1:5500"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Exchange Rate
    SETTLEMENT_CURRENCY: str = "BRL"
    FX_API_URL: str = "https://api.exchangerate-api.com/v4/latest"
    FX_TIMEOUT_SECONDS: float = 5.0

    @field_validator("SETTLEMENT_CURRENCY")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()

    # Participant invites for unknown emails create a user with this password
    PROVISIONAL_PASSWORD: str = "123456"
