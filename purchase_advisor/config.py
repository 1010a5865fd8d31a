"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./purchase_advisor.db"

    # Service
    service_name: str = "purchase-advisor"
    log_level: str = "INFO"

    # Purchase category cache
    classification_cache_max_size: int = 100
    classification_cache_ttl_seconds: float = 1800.0  # 30 minutes

    # History
    history_limit: int = 20


settings = Settings()
