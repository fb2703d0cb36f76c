"""Application settings loaded from the environment."""

import secrets
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class Settings(BaseSettings):
    """Runtime configuration.

    Every field can be set with a ``WELLNESS_`` prefixed environment variable
    or in a ``.env`` file. Set ``WELLNESS_SECRET_KEY`` so sessions survive
    restarts. The provider key is also read from the plain
    ``GROQ_API_KEY`` variable; leaving it unset runs the app in demo mode.
    """

    model_config = SettingsConfigDict(
        env_prefix="WELLNESS_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    groq_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WELLNESS_GROQ_API_KEY", "GROQ_API_KEY"),
    )
    groq_base_url: str = GROQ_BASE_URL
    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.3

    data_dir: Path = DATA_DIR
    # Unset means a random key per process: sessions end when the server restarts
    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(32), min_length=16)
    access_token_expire_minutes: int = 60
    secure_cookies: bool = False

    monthly_workout_goal: int = 12
    log_level: str = "INFO"

    @property
    def demo_mode(self) -> bool:
        """True when no provider credential is configured."""
        return not self.groq_api_key


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings."""
    return Settings()
