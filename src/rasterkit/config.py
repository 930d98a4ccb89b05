"""rasterkit configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ResampleName = Literal["nearest", "bilinear", "bicubic"]


class ConfigError(Exception):
    """Raised when a configuration value is missing or unusable.

    Example:
        >>> raise ConfigError("RESAMPLE_FILTER", "unknown filter 'box'")
        Traceback (most recent call last):
        ...
        ConfigError: RESAMPLE_FILTER is invalid: unknown filter 'box'
    """

    def __init__(self, key_name: str, reason: str) -> None:
        """Initialize configuration error.

        Args:
            key_name: Name of the offending setting.
            reason: Human-readable description of the problem.
        """
        self.key_name = key_name
        self.reason = reason
        super().__init__(f"{key_name} is invalid: {reason}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Drawing
    RESAMPLE_FILTER: ResampleName = "bilinear"

    # Allocation guard: Pillow's decompression-bomb error threshold
    MAX_PIXELS: int = Field(default=178_956_970, gt=0)

    # Legacy behaviors, off by default
    TRIM_LEGACY_RIGHT_EDGE: bool = False  # plain !=white test on the right edge
    BORDER_LEGACY_SCALE: bool = False  # scale source by the padded/original ratio

    def require_log_format(self) -> str:
        """Get the log format, raising ConfigError if it is not recognised.

        Returns:
            Either "console" or "json".

        Raises:
            ConfigError: If LOG_FORMAT holds any other value.
        """
        if self.LOG_FORMAT not in ("console", "json"):
            raise ConfigError(
                "LOG_FORMAT", f"expected 'console' or 'json', got {self.LOG_FORMAT!r}"
            )
        return self.LOG_FORMAT


# Singleton instance for import convenience
settings = Settings()
