"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use DOCMACRO_ prefix (e.g., DOCMACRO_MAX_MACRO_EXECUTIONS=50).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.macros import InlinePolicy


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use DOCMACRO_ prefix.

    Examples:
        DOCMACRO_MAX_MACRO_EXECUTIONS=200
        DOCMACRO_INLINE_POLICY=skip
        DOCMACRO_VERBOSITY=2
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCMACRO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Transformation configuration
    max_macro_executions: int = Field(
        default=1000,
        ge=0,
        description="Number of macro executions allowed in one transform call before assuming a loop",
    )

    inline_policy: InlinePolicy = Field(
        default=InlinePolicy.HALT,
        description="What to do after an inline placeholder resolves to a block-only macro (halt or skip)",
    )

    # Error rendering configuration
    error_class: str = Field(
        default="rendering-error",
        description="CSS class of the element holding a macro error message",
    )

    error_description_class: str = Field(
        default="rendering-error-description hidden",
        description="CSS class of the element holding a macro error description",
    )

    # Logging configuration
    verbosity: int = Field(
        default=0,
        ge=0,
        description="LOG() verbosity used when no program state is connected to the logger",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
