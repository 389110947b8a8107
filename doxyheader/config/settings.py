"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Annotated, Optional, List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import json
from pathlib import Path


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Doxygen Header Renderer", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    # Template Configuration
    template_dir: Optional[Path] = Field(
        default=None, description="Template directory overriding the bundled templates"
    )
    default_template: str = Field(
        default="api_embedded_header.html", description="Template rendered by default"
    )
    template_encoding: str = Field(default="utf-8", description="Template file encoding")

    # Rendering Configuration
    recognized_tokens: Annotated[List[str], NoDecode] = Field(
        default=[], description="Token names to substitute; empty means every $identifier"
    )
    keep_region_markers: bool = Field(
        default=False, description="Keep BEGIN/END comments around included regions"
    )
    default_renderer: str = Field(default="regions", description="Renderer: regions, tokens")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("default_renderer")
    @classmethod
    def validate_default_renderer(cls, v: str) -> str:
        """Validate renderer type."""
        allowed = {"regions", "tokens"}
        if v not in allowed:
            raise ValueError(f"Renderer must be one of: {allowed}")
        return v

    @field_validator("recognized_tokens", mode="before")
    @classmethod
    def parse_recognized_tokens(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse recognized tokens from string or list, dropping any leading `$`."""
        if isinstance(v, str):
            v = v.strip()
            names = None
            # Handle JSON-like string: ["treeview", "search"]
            if v.startswith("[") and v.endswith("]"):
                try:
                    names = json.loads(v)
                except json.JSONDecodeError:
                    pass
            if names is None:
                # Handle comma-separated string: "treeview,search"
                names = v.split(",")
            v = names
        if not isinstance(v, list):
            return v
        return [
            name.strip().lstrip("$") if isinstance(name, str) else name
            for name in v
            if not isinstance(name, str) or name.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="DOXYHEADER_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
