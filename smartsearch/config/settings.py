"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Relational storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "smartsearch.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms
    acquire_timeout: float = 10.0  # seconds

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class SearchSettings(BaseSettings):
    """Keyword search and fan-out configuration."""

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    # Collections searched when the request names none
    collections: list[str] = [
        "actualities",
        "initiatives",
        "articles",
        "advices",
        "guides",
    ]
    per_collection_limit: int = 3

    description_max_length: int = 200
    site_base_url: str = "https://www.e-himaya.gov.ma"

    # Never searched when fields are auto-detected
    excluded_fields: list[str] = [
        "id",
        "created_at",
        "updated_at",
        "status",
        "is_active",
        "version",
        "author_id",
        "category_id",
        "user_id",
        "image_url",
        "thumbnail",
    ]

    analytics_enabled: bool = True


class TopicSettings(BaseSettings):
    """Topic model (LDA) configuration."""

    model_config = SettingsConfigDict(env_prefix="TOPIC_")

    num_topics: int = 10
    max_iterations: int = 50
    top_words: int = 10
    doc_topic_prior: float = 0.1
    topic_word_prior: float = 0.01
    random_state: int | None = 42

    # Corpus used by the training endpoint when no collection is given
    training_collections: list[str] = ["actualities", "initiatives", "glossary"]
    training_limit: int = 10000

    # Similar-results enrichment
    similar_results: int = 3
    min_similarity: float = 0.1


class AdmissionSettings(BaseSettings):
    """Request admission (blacklist + token bucket) configuration."""

    model_config = SettingsConfigDict(env_prefix="ADMISSION_")

    enabled: bool = True
    backend: Literal["redis", "memory"] = "redis"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "smartsearch"

    # Token bucket: capacity C, refill R tokens every T seconds
    capacity: int = 20
    refill_tokens: int = 20
    refill_interval_seconds: int = 60

    # Abuse counter
    window_seconds: int = 60
    blacklist_threshold: int = 300
    blacklist_ttl_seconds: int = 900

    client_ip_headers: list[str] = [
        "X-Forwarded-For",
        "X-Real-IP",
        "Proxy-Client-IP",
        "WL-Proxy-Client-IP",
    ]
    exempt_paths: list[str] = ["/health", "/api/health", "/docs", "/redoc", "/openapi.json"]


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Smart Search"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    topic: TopicSettings = Field(default_factory=TopicSettings)
    admission: AdmissionSettings = Field(default_factory=AdmissionSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
