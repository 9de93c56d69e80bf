"""Application settings using Pydantic."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///skill_exchange.db",
        description="SQLAlchemy database URL",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a rotating log file",
    )
    matching_log_level: Optional[str] = Field(
        default=None,
        description="Level for src.matching loggers; defaults to log_level",
    )

    # Scoring
    scoring_config_path: Optional[Path] = Field(
        default=None,
        description="Optional YAML file overriding match scoring points",
    )
    scoring_workers: int = Field(
        default=1,
        ge=1,
        description="Threads used to score a candidate pool (1 = sequential)",
    )

    # Similarity search
    similar_users_limit: int = Field(
        default=10,
        ge=1,
        description="Default number of similar users returned",
    )
    similarity_pool_multiplier: Optional[int] = Field(
        default=2,
        ge=0,
        description=(
            "Candidates fetched per requested similar user. Caps the pool at "
            "multiplier x limit; 0 or unset scans every active profile."
        ),
    )

    # Recommendations
    recommendation_limit: int = Field(
        default=10,
        ge=1,
        description="Maximum number of skill recommendations",
    )

    # Paths
    config_dir: Path = Field(
        default=Path(__file__).parent,
        description="Configuration directory",
    )

    @property
    def default_scoring_path(self) -> Path:
        """Path to the bundled scoring.yaml file."""
        return self.config_dir / "scoring.yaml"


# Global settings instance
settings = Settings()
