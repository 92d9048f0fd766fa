"""Configuration management for SyllabusAI.

Uses pydantic-settings to load configuration from environment variables.
"""

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Value shipped in sample configs; treated the same as an unset key
DEMO_KEY_PLACEHOLDER = "demo-key-placeholder"


def _find_env_file() -> Path | None:
    """Search for .env file in common locations."""
    # Check current working directory first
    cwd = Path.cwd()
    if (cwd / ".env").exists():
        return cwd / ".env"

    # Check parent directories (up to 5 levels) for project root .env
    check_dir = cwd
    for _ in range(5):
        if (check_dir / ".env").exists():
            return check_dir / ".env"
        parent = check_dir.parent
        if parent == check_dir:
            break
        check_dir = parent

    # Check relative to this config file (backend/src/syllabusai/config.py -> project root)
    config_path = Path(__file__).resolve()
    project_root = config_path.parent.parent.parent.parent
    if (project_root / ".env").exists():
        return project_root / ".env"

    return None


# Find .env file location
_env_file = _find_env_file()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_env_file) if _env_file else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================
    # Environment
    # =========================
    environment: Literal["development", "staging", "production"] = "development"

    # =========================
    # AI Provider
    # =========================
    ai_provider: Literal["gemini", "openai", "anthropic"] = "gemini"
    ai_timeout_seconds: float = Field(default=45.0, gt=0)
    ai_max_content_length: int = Field(default=25000, ge=1000)
    ai_temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    ai_max_output_tokens: int = Field(default=8192, ge=1)

    # Gemini
    gemini_api_key: str = Field(default=DEMO_KEY_PLACEHOLDER, repr=False)
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"

    # OpenAI
    openai_api_key: str = Field(default="", repr=False)
    openai_model: str = "gpt-4o-mini"

    # Anthropic
    anthropic_api_key: str = Field(default="", repr=False)
    anthropic_model: str = "claude-3-5-haiku-latest"

    # =========================
    # Extraction
    # =========================
    semester_start: date | None = Field(
        default=None,
        description="First day of the semester used for AI date arithmetic",
    )
    enable_difficulty_analysis: bool = False

    # =========================
    # Logging
    # =========================
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @property
    def ai_api_key(self) -> str:
        """Credential for the configured AI provider."""
        keys = {
            "gemini": self.gemini_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }
        return keys[self.ai_provider]

    @computed_field
    @property
    def ai_demo_mode(self) -> bool:
        """True when no usable credential is configured for the AI provider."""
        key = self.ai_api_key
        return not key or not key.strip() or key == DEMO_KEY_PLACEHOLDER

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
