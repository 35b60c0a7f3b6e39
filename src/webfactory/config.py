"""Configuration management for webfactory."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import BLUEPRINT_EXTENSION, BLUEPRINTS_DIR, COMPONENTS_DIR


class WebfactoryConfig(BaseSettings):
    """Configuration settings for webfactory."""

    model_config = SettingsConfigDict(
        env_prefix="WEBFACTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Build locations
    source_path: Path = Field(Path("."), description="Directory holding blueprints/ and components/")
    target_path: Path = Field(Path("."), description="Directory the site is written to")
    log_dir: Optional[Path] = Field(None, description="Directory for the build log file")

    # Source layout
    blueprints_dir: str = BLUEPRINTS_DIR
    components_dir: str = COMPONENTS_DIR
    blueprint_extension: str = BLUEPRINT_EXTENSION

    # Output settings
    asset_prefix: str = Field("", description="URL prefix for css/ and js/ links")

    verbose: bool = False

    @classmethod
    def from_env(cls) -> "WebfactoryConfig":
        """Create config from environment variables."""
        return cls()


# Global config instance
config = WebfactoryConfig.from_env()
