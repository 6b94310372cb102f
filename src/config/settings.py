"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FIXEDFILE_ prefix (e.g., FIXEDFILE_DEFAULT_PALETTE=rainbow).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FIXEDFILE_ prefix.

    Examples:
        FIXEDFILE_DEFAULT_PALETTE=rainbow
        FIXEDFILE_TEXT_COLOR=000
        FIXEDFILE_FOOTER_ENABLED=false
    """

    model_config = SettingsConfigDict(
        env_prefix="FIXEDFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Color configuration
    default_palette: str = Field(
        default="greyscale",
        description="Palette used when no --colors option is given",
    )

    palettes_file: Optional[str] = Field(
        default=None,
        description="YAML file of named palettes, replacing the packaged presets",
    )

    text_color: str = Field(
        default="020202",
        description="Foreground hex color for highlighted fields",
    )

    # Input configuration
    input_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read the input and syntax files",
    )

    # Output configuration
    footer_enabled: bool = Field(
        default=True,
        description="Append the 'Analysed at ...' footer with the embedded syntax file",
    )

    project_url: str = Field(
        default="https://github.com/lilopkins/fixedfile-highlighter",
        description="Link target for the project name in the footer",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
