import logging
import sys
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from uno_engine.schemas.game_state import RetentionMode

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Engine defaults, overridable through ``UNO_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="UNO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Game defaults
    STACK_PLUS_TWOS: bool = True
    RETENTION_MODE: RetentionMode = RetentionMode.FULL

    # Logging
    DEBUG: bool = False


class GameConfig(BaseModel):
    """Options for starting a new game. Fixed for the lifetime of the game."""

    stack_plus_twos: bool = Field(
        True, description="Multiply the draw penalty by the length of a draw two chain"
    )
    initial_seed: str | int | None = Field(
        None, description="Seed for the deck shuffle; random when omitted"
    )
    retention_mode: RetentionMode = RetentionMode.FULL

    @classmethod
    def from_settings(cls, settings: "Settings | None" = None, **overrides) -> "GameConfig":
        """Build a config from the environment defaults, then apply overrides."""
        settings = settings or get_settings()
        values = {
            "stack_plus_twos": settings.STACK_PLUS_TWOS,
            "retention_mode": settings.RETENTION_MODE,
        }
        values.update(overrides)
        return cls(**values)


def configure_logging(debug: bool = False) -> None:
    """Configure logging for an application embedding the engine.

    The engine never calls this itself; the host application opts in,
    e.g. ``configure_logging(get_settings().DEBUG)``.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    logger.info("Settings loaded successfully")
    logger.debug(
        "Defaults: stack_plus_twos=%s, retention_mode=%s",
        settings.STACK_PLUS_TWOS,
        settings.RETENTION_MODE.value,
    )
    return settings
