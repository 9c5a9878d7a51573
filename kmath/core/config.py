"""
Library configuration.

Centralized numeric defaults and logging options, overridable through
environment variables prefixed with ``KMATH_`` or a local ``.env`` file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="KMATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Root finding
    ROOT_EPSILON: float = 1e-12
    INTERVAL_EPSILON: float = 1e-24
    MAX_STEPS: int = 10000

    # Gauss-Legendre rule generation: grid cells per n^2 when scanning for roots
    LEGENDRE_GRID_FACTOR: int = 20

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    @field_validator("ROOT_EPSILON", "INTERVAL_EPSILON")
    @classmethod
    def _validate_epsilon(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError("tolerances must be strictly positive")
        return value

    @field_validator("MAX_STEPS", "LEGENDRE_GRID_FACTOR")
    @classmethod
    def _validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("LOG_FORMAT")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
