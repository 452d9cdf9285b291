"""Application settings and configuration."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from quiz_session.models.quiz import Tier

# Load .env file if present
load_dotenv()


DEFAULT_TIERS = [
    Tier(min_percent=90, message="Excellent! You have mastered this material.", icon="🎉"),
    Tier(min_percent=70, message="Well done! Keep going, you can do even better.", icon="👍"),
    Tier(min_percent=60, message="You passed. Reviewing the related topics is recommended.", icon="💪"),
    Tier(min_percent=0, message="Needs more work. Consider studying this section again.", icon="📚"),
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the quiz_session logger",
        validation_alias="QUIZ_LOG_LEVEL",
    )

    # Completion messages, picked by accuracy percent (JSON list in the env)
    tiers: list[Tier] = Field(
        default_factory=lambda: list(DEFAULT_TIERS),
        description="Graded completion messages",
        validation_alias="QUIZ_TIERS",
    )

    show_explanations: bool = Field(
        default=True,
        description="Show explanations after each answer",
        validation_alias="QUIZ_SHOW_EXPLANATIONS",
    )

    report_output_dir: str = Field(
        default="output",
        description="Directory for exported session reports",
        validation_alias="QUIZ_REPORT_DIR",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("tiers")
    @classmethod
    def validate_tiers(cls, v: list[Tier]) -> list[Tier]:
        """Ensure at least one tier exists."""
        if not v:
            raise ValueError("At least one tier is required")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Loaded once, then shared by the CLI and any driver built without explicit tiers
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
