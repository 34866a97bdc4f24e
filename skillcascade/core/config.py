"""Configuration management for the SkillCascade ceiling engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    SKILLCASCADE_ENV: str = Field(default="dev", description="Environment: dev, test, prod")

    # Static dataset overrides (bundled JSON assets are used when unset)
    TAXONOMY_PATH: str | None = Field(
        default=None, description="Path to a taxonomy JSON file replacing the bundled one"
    )
    PREREQUISITES_PATH: str | None = Field(
        default=None, description="Path to a prerequisite graph JSON file replacing the bundled one"
    )

    # HTTP surface
    START_HERE_DEFAULT_LIMIT: int = Field(
        default=20, ge=1, description="Default number of Start Here entries returned per request"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If an environment variable has an invalid value
    """
    return Settings()
