"""Tests for configuration loading and validation."""

from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from tedx_site.config import (
    Config,
    ContentfulConfig,
    PagesConfig,
    apply_env_overrides,
    load_config,
)
from tedx_site.errors import ConfigError


class TestContentfulConfig:
    """Tests for the Contentful section."""

    def test_defaults(self) -> None:
        """Test environment and timeout defaults."""
        config = ContentfulConfig(space_id="abc", access_token="tok")

        assert config.environment == "master"
        assert config.timeout_ms == 25000

    def test_endpoint(self) -> None:
        """Test endpoint is scoped to space and environment."""
        config = ContentfulConfig(space_id="abc", access_token="tok", environment="staging")

        assert config.endpoint == (
            "https://graphql.contentful.com/content/v1/spaces/abc/environments/staging"
        )

    @pytest.mark.parametrize(
        ("space_id", "access_token"),
        [(None, "tok"), ("abc", None), ("", "tok"), (None, None)],
    )
    def test_require_credentials_missing(
        self, space_id: str | None, access_token: str | None
    ) -> None:
        """Test missing credentials raise ConfigError naming both variables."""
        config = ContentfulConfig(space_id=space_id, access_token=access_token)

        with pytest.raises(ConfigError, match="CONTENTFUL_SPACE_ID and CONTENTFUL_ACCESS_TOKEN"):
            config.require_credentials()

    def test_require_credentials_present(self) -> None:
        """Test complete credentials pass."""
        ContentfulConfig(space_id="abc", access_token="tok").require_credentials()

    def test_timeout_must_be_positive(self) -> None:
        """Test a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            ContentfulConfig(timeout_ms=0)


class TestPagesConfig:
    """Tests for per-page settings."""

    def test_about_codes_from_comma_string(self) -> None:
        """Test ABOUT_IMAGE_CODES style strings are split and trimmed."""
        pages = PagesConfig(about_image_codes=" about-hero , about-story ,, ")

        assert pages.about_image_codes == ["about-hero", "about-story"]

    @pytest.mark.parametrize("value", ["abc", "0", "-5", None])
    def test_invalid_video_limit_falls_back(self, value: object) -> None:
        """Test invalid or non-positive limits use the default."""
        pages = PagesConfig(watch_video_limit=value)

        assert pages.watch_video_limit == 200

    def test_valid_video_limit(self) -> None:
        """Test a positive limit is kept."""
        assert PagesConfig(watch_video_limit="12").watch_video_limit == 12

    def test_about_code_chain(self) -> None:
        """Test about codes default to the landing hero code."""
        pages = PagesConfig(landing_hero_code="landing-hero")

        assert pages.resolved_about_hero_code == "landing-hero"
        assert pages.resolved_about_story_code == "landing-hero"

        pages = PagesConfig(about_hero_code="about-hero")
        assert pages.resolved_about_story_code == "about-hero"

    def test_team_year_defaults_to_current_year(self) -> None:
        """Test the roster year falls back to the current year."""
        assert PagesConfig().resolved_team_year == datetime.now().year
        assert PagesConfig(team_year=2023).resolved_team_year == 2023


class TestSiteConfig:
    """Tests for site locations."""

    def test_dist_defaults_under_root(self) -> None:
        """Test dist defaults to <root>/dist."""
        config = Config.model_validate({"site": {"root": "/srv/site"}})

        assert config.site.dist_dir == Path("/srv/site/dist")

    def test_explicit_dist(self) -> None:
        """Test an explicit dist directory wins."""
        config = Config.model_validate({"site": {"root": "/srv/site", "dist": "/tmp/out"}})

        assert config.site.dist_dir == Path("/tmp/out")


class TestEnvOverrides:
    """Tests for environment variable overlay."""

    def test_overrides_applied(self) -> None:
        """Test environment values land in their sections."""
        raw = apply_env_overrides(
            {},
            {
                "CONTENTFUL_SPACE_ID": "space",
                "CONTENTFUL_ACCESS_TOKEN": " token ",
                "EVENT_YEAR": "2024",
            },
        )

        assert raw["contentful"] == {"space_id": "space", "access_token": "token"}
        assert raw["pages"] == {"event_year": "2024"}

    def test_blank_values_ignored(self) -> None:
        """Test empty or whitespace-only variables do not override."""
        raw = apply_env_overrides({"pages": {"team_year": 2022}}, {"TEAM_YEAR": "  "})

        assert raw == {"pages": {"team_year": 2022}}


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_without_file(self) -> None:
        """Test loading purely from an environment mapping."""
        config = load_config(
            env={
                "CONTENTFUL_SPACE_ID": "space",
                "CONTENTFUL_ACCESS_TOKEN": "token",
                "WATCH_VIDEO_LIMIT": "not-a-number",
                "ABOUT_IMAGE_CODES": "a,b",
            }
        )

        assert config.contentful.space_id == "space"
        assert config.pages.watch_video_limit == 200
        assert config.pages.about_image_codes == ["a", "b"]

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        """Test environment takes precedence over the YAML file."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "contentful:\n"
            "  space_id: from-file\n"
            "  access_token: file-token\n"
            "pages:\n"
            "  team_year: 2023\n"
            "  event_list_limit: 5\n"
        )

        config = load_config(config_path, env={"CONTENTFUL_SPACE_ID": "from-env"})

        assert config.contentful.space_id == "from-env"
        assert config.contentful.access_token == "file-token"
        assert config.pages.team_year == 2023
        assert config.pages.event_list_limit == 5

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty YAML file yields defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")

        config = load_config(config_path, env={})

        assert config.pages.landing_hero_code == "hero-background"
        assert config.contentful.space_id is None

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml", env={})

    def test_invalid_year(self) -> None:
        """Test a non-numeric EVENT_YEAR is a validation error."""
        with pytest.raises(ValidationError):
            load_config(env={"EVENT_YEAR": "next"})
