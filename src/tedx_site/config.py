"""Configuration loading and validation.

Values come from model defaults, then an optional YAML file, then the
environment (a local ``.env`` file is loaded first, if present).
"""

import os
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from tedx_site.errors import ConfigError

CONTENTFUL_GRAPHQL_BASE = "https://graphql.contentful.com/content/v1/spaces"
DEFAULT_HERO_CODE = "hero-background"
DEFAULT_WATCH_VIDEO_LIMIT = 200


class ContentfulConfig(BaseModel):
    """Contentful delivery API configuration."""

    space_id: str | None = None
    access_token: str | None = None
    environment: str = "master"
    timeout_ms: int = Field(default=25000, ge=1, description="Request timeout in milliseconds")

    @property
    def endpoint(self) -> str:
        """GraphQL endpoint scoped to the space and environment."""
        return f"{CONTENTFUL_GRAPHQL_BASE}/{self.space_id}/environments/{self.environment}"

    def require_credentials(self) -> None:
        """Fail if the space id or access token is absent.

        Raises:
            ConfigError: If either credential is missing.
        """
        if not self.space_id or not self.access_token:
            msg = (
                "Missing Contentful credentials. Set CONTENTFUL_SPACE_ID and "
                "CONTENTFUL_ACCESS_TOKEN in your environment."
            )
            raise ConfigError(msg)


class PagesConfig(BaseModel):
    """Per-page overrides for codes, years and limits."""

    landing_hero_code: str = DEFAULT_HERO_CODE
    about_image_codes: list[str] = Field(default_factory=list)
    about_hero_code: str | None = None
    about_story_code: str | None = None
    event_year: int | None = None
    event_list_limit: int = Field(default=20, ge=1)
    team_year: int | None = None
    team_limit: int = Field(default=400, ge=1)
    watch_video_limit: int = DEFAULT_WATCH_VIDEO_LIMIT

    @field_validator("about_image_codes", mode="before")
    @classmethod
    def split_codes(cls, v: Any) -> Any:
        """Accept a comma separated string as well as a list."""
        if isinstance(v, str):
            return [code.strip() for code in v.split(",") if code.strip()]
        return v

    @field_validator("watch_video_limit", mode="before")
    @classmethod
    def positive_video_limit(cls, v: Any) -> int:
        """Fall back to the default limit for invalid or non-positive values."""
        try:
            parsed = int(v)
        except (TypeError, ValueError):
            return DEFAULT_WATCH_VIDEO_LIMIT
        return parsed if parsed > 0 else DEFAULT_WATCH_VIDEO_LIMIT

    @property
    def resolved_about_hero_code(self) -> str:
        return self.about_hero_code or self.landing_hero_code

    @property
    def resolved_about_story_code(self) -> str:
        return self.about_story_code or self.resolved_about_hero_code

    @property
    def resolved_team_year(self) -> int:
        return self.team_year if self.team_year is not None else datetime.now().year


class SiteConfig(BaseModel):
    """Site source and output locations."""

    root: Path = Field(default=Path("."))
    dist: Path | None = None

    @property
    def dist_dir(self) -> Path:
        return self.dist if self.dist is not None else self.root / "dist"


class Config(BaseModel):
    """Root configuration model."""

    contentful: ContentfulConfig = Field(default_factory=ContentfulConfig)
    pages: PagesConfig = Field(default_factory=PagesConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)


# Environment variable -> (section, field)
ENV_VARS: dict[str, tuple[str, str]] = {
    "CONTENTFUL_SPACE_ID": ("contentful", "space_id"),
    "CONTENTFUL_ACCESS_TOKEN": ("contentful", "access_token"),
    "CONTENTFUL_ENVIRONMENT": ("contentful", "environment"),
    "CONTENTFUL_TIMEOUT_MS": ("contentful", "timeout_ms"),
    "LANDING_HERO_ASSET_CODE": ("pages", "landing_hero_code"),
    "ABOUT_IMAGE_CODES": ("pages", "about_image_codes"),
    "ABOUT_HERO_IMAGE_CODE": ("pages", "about_hero_code"),
    "ABOUT_STORY_IMAGE_CODE": ("pages", "about_story_code"),
    "EVENT_YEAR": ("pages", "event_year"),
    "EVENT_LIST_LIMIT": ("pages", "event_list_limit"),
    "TEAM_YEAR": ("pages", "team_year"),
    "TEAM_LIMIT": ("pages", "team_limit"),
    "WATCH_VIDEO_LIMIT": ("pages", "watch_video_limit"),
    "SITE_ROOT": ("site", "root"),
    "SITE_DIST": ("site", "dist"),
}


def apply_env_overrides(raw: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Overlay non-empty environment variables onto a raw config mapping."""
    for var, (section, key) in ENV_VARS.items():
        value = env.get(var)
        if value is None or not value.strip():
            continue
        section_data = raw.get(section) or {}
        section_data[key] = value.strip()
        raw[section] = section_data
    return raw


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Config:
    """Load and validate configuration.

    Args:
        path: Optional YAML configuration file.
        env: Environment mapping. Defaults to ``os.environ`` after loading ``.env``.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    raw_config: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        with path.open() as f:
            raw_config = yaml.safe_load(f) or {}

    if env is None:
        load_dotenv()
        env = os.environ

    return Config.model_validate(apply_env_overrides(raw_config, env))
