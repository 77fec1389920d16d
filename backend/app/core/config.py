"""Application configuration"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./shop.db"
    ENVIRONMENT: str = "development"
    SQL_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Rate limiting (mutating endpoints)
    RATE_LIMIT_PER_MINUTE: int = 60

    # Insert the sample catalog on startup when the table is empty
    SEED_SAMPLE_DATA: bool = False

    class Config:
        env_file = ".env"


settings = Settings()
