"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./sme_readiness.db"

    # Question catalog (None = bundled data/questions.json)
    catalog_path: Optional[str] = None

    # Service
    service_name: str = "sme-readiness"
    log_level: str = "INFO"

    # Results
    history_limit: int = 20
    max_strengths: int = 5

    # Create tables at startup (disable when the schema is managed elsewhere)
    create_tables: bool = True


settings = Settings()
