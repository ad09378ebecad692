"""Configuration management using Pydantic settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Data locations
    data_dir: str = Field(
        default="data",
        description="Root directory for catalog, raw sources, extracted text and seeds",
    )
    catalog_path: str = Field(
        default="data/source_catalog.json",
        description="Path to the source catalog JSON listing documents to ingest",
    )
    source_raw_dir: str = Field(
        default="data/source/raw",
        description="Directory holding raw sources ({id}.txt extracted text or {id}.html pages)",
    )
    source_text_dir: str = Field(
        default="data/source/text",
        description="Directory where normalized source text is written for verification",
    )
    seed_dir: str = Field(
        default="data/seed",
        description="Directory where parsed documents and the ingestion report are written",
    )

    # Parsing
    min_article_chars: int = Field(
        default=40,
        ge=1,
        le=1000,
        description="Minimum cleaned body length for an article heading to produce a provision. "
        "Shorter bodies are treated as cross-references.",
    )
    chapter_lookback_chars: int = Field(
        default=2000,
        ge=0,
        le=20000,
        description="Characters searched before an article heading for its chapter/section/title heading",
    )
    definition_section: str = Field(
        default="2",
        description="Section label of the article whose body enumerates definitions",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level used by the command-line scripts",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEXMAROC_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", "catalog_path", "source_raw_dir", "source_text_dir", "seed_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject empty paths."""
        if not v or v.strip() == "":
            raise ValueError("Data paths must not be empty.")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


# Singleton instance
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings instance (singleton pattern).

    Returns:
        Settings instance (cached after first call)
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
