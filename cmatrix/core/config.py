"""
Library configuration.

Centralized configuration management with environment variables.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="CMATRIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Arithmetic
    DIMENSION_CHECK: Literal["strict", "legacy"] = "strict"
    DETERMINANT_WARN_SIZE: int = Field(default=9, ge=1)

    # Comparison tolerances
    TOLERANCE: float = Field(default=0.001, ge=0)
    TOL_TYPE: Literal["relative", "absolute", "sigfigs"] = "relative"

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
