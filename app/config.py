"""
Application configuration settings.
"""
from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List
import os


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - PostgreSQL for production, SQLite for local
    DATABASE_URL: str = ""  # PostgreSQL connection string (production)
    DATABASE_PATH: str = "data/eca_tracker.db"  # SQLite path (local fallback)
    USE_POSTGRES: bool = False  # Set to True to use PostgreSQL

    # Data paths
    RAW_DATA_DIR: str = "data/raw"

    # CSV sources for scripts/init_database.py
    GEOGRAPHY_CSV_DIR: str = "data/raw/geography"
    CITIZENS_CSV_PATH: str = "data/raw/citizens.csv"
    STAFF_CSV_PATH: str = "data/raw/staff.csv"

    # API settings
    API_V1_PREFIX: str = "/api"
    PROJECT_NAME: str = "ECA Benefits Tracker"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Eligibility window: the calendar years the birth-year lookup covers.
    # Must be extended by hand once 2028 has passed.
    DEFAULT_CALENDAR_YEARS: List[int] = [2024, 2025, 2026, 2027, 2028]
    MIN_CALENDAR_YEAR: int = 1900
    MAX_CALENDAR_YEAR: int = 2100

    # Cash gifts (PHP)
    CENTENARIAN_CASH_GIFT: int = 100000
    MILESTONE_CASH_GIFT: int = 10000

    # Duplicate check
    DUPLICATE_MIN_CONFIDENCE: int = 70

    # Pagination
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 1000

    @property
    def database_url(self) -> str:
        """Get database URL - PostgreSQL if configured, else SQLite."""
        if self.USE_POSTGRES and self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATABASE_PATH}"

    @property
    def is_postgres(self) -> bool:
        """Check if using PostgreSQL."""
        return self.USE_POSTGRES and bool(self.DATABASE_URL)

    @property
    def base_dir(self) -> Path:
        """Get base directory of the project."""
        return Path(__file__).parent.parent

    class Config:
        env_file = ".env"
        extra = "allow"


# Global settings instance
settings = Settings()


# Ensure directories exist
def ensure_directories():
    """Create necessary directories if they don't exist."""
    dirs = [
        os.path.dirname(settings.DATABASE_PATH) or ".",
        settings.RAW_DATA_DIR,
    ]
    for dir_path in dirs:
        os.makedirs(dir_path, exist_ok=True)
