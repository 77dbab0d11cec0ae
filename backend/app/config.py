"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./award_rooms.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    PUBLIC_BASE_URL: str = ""
    LOG_LEVEL: str = "INFO"

    # Group codes are short and human-typeable; ambiguous glyphs (0/O, 1/I) are left out
    GROUP_CODE_LENGTH: int = 6
    GROUP_CODE_ALPHABET: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
    GROUP_CODE_ATTEMPTS: int = 5
    TOKEN_BYTES: int = 32

    MAX_GROUP_SIZE: int = 100
    DISPLAY_NAME_MAX_LENGTH: int = 40
    CATALOG_EDITION: str = "oscars_2026"

    class Config:
        env_file = ".env"


settings = Settings()
