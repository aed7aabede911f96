"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use EMPHDOWN_ prefix (e.g., EMPHDOWN_BOLD_ELEMENT=strong).

Settings can also be loaded from a .env file in the project root.
"""

import re
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


HTML_ELEMENT_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use EMPHDOWN_ prefix.

    Examples:
        EMPHDOWN_BOLD_ELEMENT=strong
        EMPHDOWN_ITALIC_ELEMENT=em
        EMPHDOWN_OUTPUT_EXTENSION=.htm
    """

    model_config = SettingsConfigDict(
        env_prefix="EMPHDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Tag table configuration
    header_element: str = Field(
        default="h1",
        description="HTML element opened by a leading '#' word",
    )

    bold_element: str = Field(
        default="b",
        description="HTML element for __bold__ spans",
    )

    italic_element: str = Field(
        default="i",
        description="HTML element for _italic_ spans",
    )

    span_element: str = Field(
        default="span",
        description="HTML element wrapping every line (paragraph)",
    )

    # I/O configuration
    input_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read markdown source files",
    )

    output_extension: str = Field(
        default=".html",
        description="Extension of the rendered file (replaces the source suffix)",
    )

    @field_validator("header_element", "bold_element", "italic_element", "span_element")
    @classmethod
    def element_validate(cls, value: str) -> str:
        """Reject element names that would produce malformed tags"""
        if not HTML_ELEMENT_PATTERN.match(value):
            raise ValueError(f"invalid HTML element name: {value!r}")
        return value

    def outputName_make(self, source_name: str) -> str:
        """
        Build the rendered file name for a source file name.

        Args:
            source_name: Source file name (e.g., "notes.md")

        Returns:
            Output file name with the configured extension

        Example:
            >>> settings = AppSettings()
            >>> settings.outputName_make("notes.md")
            'notes.html'
        """
        return f"{Path(source_name).stem}{self.output_extension}"


# Singleton instance - import this in your code
appsettings = AppSettings()
