import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from atomfeed.core.utils import DEFAULT_SUMMARY_WORDS, DEFAULT_TIMESTAMP_FORMAT

CONFIG_FILE_NAME = ".atomfeed.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(destination.get(key, {}), value)
        else:
            destination[key] = value
    return destination


class SiteSettings(BaseModel):
    """Site-wide values the feed is derived from.

    Unset values fall back to the matching store texts
    (``$:/SiteTitle``, ``$:/SiteSubtitle``, ``$:/config/atomserver``).
    """

    title: str | None = Field(default=None, description="Site title")
    subtitle: str | None = Field(default=None, description="Site subtitle")
    server_url: str | None = Field(default=None, description="Base URL the feed and site are served from")


class FeedSettings(BaseModel):
    """Feed generation options."""

    path: str = Field(default="atom.xml", description="Feed document path relative to the server URL")
    timestamp_format: str = Field(default=DEFAULT_TIMESTAMP_FORMAT, description="strftime format for <updated>")
    summary_fallback: bool = Field(
        default=False,
        description="Use a truncated body excerpt when a record has no summary",
    )
    summary_words: int = Field(default=DEFAULT_SUMMARY_WORDS, ge=1, description="Excerpt length in words")
    max_entries: int | None = Field(default=None, ge=1, description="Cap for store-discovered feeds")


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )
    content_dir: Path = Field(default=Path("tiddlers"), description="Content records directory")
    output: Path = Field(default=Path("atom.xml"), description="Feed output file")

    @property
    def abs_content_dir(self) -> Path:
        return self._resolve(self.content_dir)

    @property
    def abs_output(self) -> Path:
        return self._resolve(self.output)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class AtomFeedConfig(BaseSettings):
    """Root configuration for atomfeed.

    Supports environment variable overrides with the pattern:
    ATOMFEED_SECTION__KEY (e.g., ATOMFEED_SITE__SERVER_URL)
    """

    site: SiteSettings = Field(default_factory=SiteSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="ATOMFEED_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "AtomFeedConfig":
        """Loads configuration from .atomfeed.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (ATOMFEED_SECTION__KEY)
        2. Config file (.atomfeed.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILE_NAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        env_settings = cls().model_dump(exclude_unset=True)

        merged_config = _deep_merge(file_settings, env_settings)
        merged_config.setdefault("paths", {})["site_root"] = root_path

        return cls.model_validate(merged_config)
