"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Engine settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        db_timeout_seconds: Connection/statement timeout for persistence calls
        lock_timeout_seconds: Maximum wait for the per-patient write lock
        seed_interactions: Seed the built-in interaction table when it is empty

        # Notification settings
        alert_webhook_url: Optional endpoint that receives every created alert
        notification_timeout_seconds: HTTP timeout for webhook delivery

        # Service settings
        log_level: Root logging level
        cors_origins: Allowed CORS origins for the API
    """
    # Database settings
    database_url: str = "sqlite:///./medsafety.db"
    db_timeout_seconds: int = 10
    lock_timeout_seconds: float = 5.0
    seed_interactions: bool = True

    # Notification settings
    alert_webhook_url: Optional[str] = None
    notification_timeout_seconds: float = 5.0

    # Service settings
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
