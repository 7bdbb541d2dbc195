"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use VVSML_ prefix (e.g., VVSML_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use VVSML_ prefix.

    Examples:
        VVSML_MAX_PASSES=64
        VVSML_STRICT_MODE=true
        VVSML_COLLAPSE_WHITESPACE=false
    """

    model_config = SettingsConfigDict(
        env_prefix="VVSML_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Preprocessor configuration
    max_passes: int = Field(
        default=256,
        ge=0,
        description="Upper bound on full preprocessing passes before giving up (0 disables the bound)",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: treat warnings (e.g. redundant format specifiers) as errors",
    )

    # Parser configuration
    collapse_whitespace: bool = Field(
        default=True,
        description="Collapse whitespace runs inside leaf payloads to a single space",
    )

    # I/O configuration
    source_encoding: str = Field(
        default="utf-8",
        description="Encoding used for source, include and table files",
    )

    output_encoding: str = Field(
        default="utf-8",
        description="Encoding used when writing the generated HTML",
    )

    def passLimit_reached(self, passes: int) -> bool:
        """
        Check whether a preprocessing pass count exceeds the configured bound.

        Args:
            passes: Number of passes already run

        Returns:
            True if the bound is enabled and has been exceeded

        Example:
            >>> settings = AppSettings(max_passes=2)
            >>> settings.passLimit_reached(3)
            True
        """
        return self.max_passes > 0 and passes > self.max_passes


# Singleton instance - import this in your code
appsettings = AppSettings()
