"""
Application configuration settings
"""

from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "LawDesk Practice Management"
    DEBUG: bool = False
    VERSION: str = "1.0.0"
    TESTING: bool = False

    # API
    API_PREFIX: str = ""
    ALLOWED_HOSTS: List[str] = ["*"]

    # Database - Individual components
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "lawdesk"

    # Constructed DATABASE_URL from individual components
    @property
    def DATABASE_URL(self) -> str:
        """Construct PostgreSQL connection URL from individual components"""
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # Create tables with metadata.create_all when no Alembic config is present
    AUTO_CREATE_TABLES: bool = True

    # JWT Configuration
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Security Configuration
    PASSWORD_MIN_LENGTH: int = 6

    # Calendar slot suggestion
    CALENDAR_TIMEZONE: str = "UTC"
    WORKDAY_START_HOUR: int = 9
    WORKDAY_END_HOUR: int = 17
    SLOT_MIN_GAP_MINUTES: int = 30
    SLOT_LENGTH_MINUTES: int = 60

    # Notifications
    UPCOMING_SESSION_HOURS: int = 24

    # AI Configuration
    ENABLE_AI_FEATURES: bool = True
    AI_SUMMARY_MAX_CHARS: int = 300

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()

def get_settings() -> Settings:
    """Get application settings"""
    return settings
