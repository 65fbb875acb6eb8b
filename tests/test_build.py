"""Tests for the build orchestrator."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from tedx_site.config import Config
from tedx_site.errors import BuildError, ConfigError, EmptyContentError
from tedx_site.paths import PathManager
from tedx_site.render.build import (
    build_site,
    clean_dist,
    copy_static_assets,
    default_steps,
    format_duration,
    render_page,
)

from conftest import (
    FakeContentful,
    card_record,
    event_details,
    event_list,
    event_record,
    image_record,
    static_images,
    video_record,
)


def wire_site(contentful: FakeContentful) -> None:
    """Answer every query a full build makes."""
    contentful.on("EventList", event_list(2025))
    contentful.on("EventByYear", event_details({2025: event_record(2025)}))
    contentful.on(
        "TeamByYear",
        {"newTeamMemberCardCollection": {"items": [card_record("Ada", "Lovelace")]}},
    )
    contentful.on(
        "EmbeddedVideos",
        {
            "newEmbeddedVideoCollection": {
                "items": [video_record("v1", "Talk", 2025, "https://youtu.be/aaaaaaaaaaa")]
            }
        },
    )
    contentful.on(
        "StaticImagesByCode",
        static_images(
            image_record("hero-background", "//images.ctfassets.net/hero.jpg"),
            image_record("sponsor-logo", "//images.ctfassets.net/sponsor.png"),
            image_record("contact-map", "//images.ctfassets.net/map.png"),
        ),
    )


def snapshot(root: Path) -> dict[str, bytes]:
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


class TestBuildSite:
    """Tests for build_site."""

    @pytest.mark.asyncio
    async def test_full_build(self, contentful: FakeContentful, config: Config) -> None:
        wire_site(contentful)
        dist = config.site.dist_dir
        dist.mkdir(parents=True)
        (dist / "stale.html").write_text("old")

        stats = await build_site(config)

        assert not (dist / "stale.html").exists()
        assert (dist / "styles.css").read_text() == "body { margin: 0; }\n"
        assert (dist / "assets/logos/logo.svg").exists()
        for relative in (
            "index.html",
            "sites/events/events.html",
            "sites/about/about.html",
            "sites/team/team.html",
            "sites/watch/watch.html",
            "sites/contact/contact.html",
        ):
            assert str(dist / relative) in stats["pages_written"]
        assert len(stats["pages_written"]) == 6
        assert [step["name"] for step in stats["steps"]] == [
            "clean",
            "copy",
            "landing",
            "events",
            "about",
            "team",
            "watch",
            "static",
        ]
        assert stats["requests_made"] == len(contentful.calls)
        assert stats["assets_copied"] == 7

    @pytest.mark.asyncio
    async def test_assets_cached_across_pages(
        self, contentful: FakeContentful, config: Config
    ) -> None:
        """Test the hero code resolved for the landing page is not queried again for about."""
        wire_site(contentful)

        await build_site(config)

        calls = contentful.calls_for("StaticImagesByCode")
        requested = [code for call in calls for code in call["codes"]]
        assert requested.count("hero-background") == 1

    @pytest.mark.asyncio
    async def test_rebuild_is_byte_identical(
        self, contentful: FakeContentful, config: Config
    ) -> None:
        wire_site(contentful)

        await build_site(config)
        first = snapshot(config.site.dist_dir)
        await build_site(config)
        second = snapshot(config.site.dist_dir)

        assert first == second

    @pytest.mark.asyncio
    async def test_failing_step_names_step(
        self, contentful: FakeContentful, config: Config
    ) -> None:
        wire_site(contentful)
        contentful.on("TeamByYear", {"newTeamMemberCardCollection": {"items": []}})

        with pytest.raises(BuildError) as exc_info:
            await build_site(config)

        assert exc_info.value.step == "team"
        assert isinstance(exc_info.value.cause, EmptyContentError)
        assert contentful.calls_for("EmbeddedVideos") == []

    @pytest.mark.asyncio
    async def test_missing_credentials(self, site_root: Path) -> None:
        config = Config.model_validate({"site": {"root": str(site_root)}})

        with pytest.raises(ConfigError, match="CONTENTFUL_SPACE_ID"):
            await build_site(config)

    @pytest.mark.asyncio
    async def test_step_logging(
        self,
        contentful: FakeContentful,
        config: Config,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        wire_site(contentful)
        caplog.set_level(logging.INFO, logger="tedx_site")

        await build_site(config)

        messages = [record.getMessage() for record in caplog.records]
        assert "▶ Rendering team page..." in messages
        assert any(message.startswith("✓ Cleaning dist (") for message in messages)


class TestRenderPage:
    @pytest.mark.asyncio
    async def test_single_page_without_clean(
        self, contentful: FakeContentful, config: Config
    ) -> None:
        wire_site(contentful)
        dist = config.site.dist_dir
        dist.mkdir(parents=True)
        (dist / "keep.txt").write_text("kept")

        stats = await render_page(config, "watch")

        assert stats["pages_written"] == [str(dist / "sites/watch/watch.html")]
        assert (dist / "keep.txt").exists()
        assert not (dist / "index.html").exists()

    @pytest.mark.asyncio
    async def test_unknown_page(self, config: Config) -> None:
        with pytest.raises(ValueError, match="Unknown page"):
            await render_page(config, "blog")


class TestCleanAndCopy:
    def test_refuses_site_root(self, site_root: Path) -> None:
        config = Config.model_validate({"site": {"root": str(site_root), "dist": str(site_root)}})

        with pytest.raises(ConfigError):
            clean_dist(PathManager(config))

        assert (site_root / "index.html").exists()

    def test_missing_entries_skipped(self, make_config: Callable[..., Config]) -> None:
        paths = PathManager(make_config())

        copied = copy_static_assets(paths)

        assert copied == 7
        assert not (paths.dist_root / "app.js").exists()
        assert (paths.dist_root / "sites/contact/contact.html").exists()


class TestSteps:
    def test_default_order(self) -> None:
        assert [step.name for step in default_steps()] == [
            "clean",
            "copy",
            "landing",
            "events",
            "about",
            "team",
            "watch",
            "static",
        ]

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0ms"), (0.1234, "123ms"), (1.234, "1.23s"), (12.5, "12.50s")],
    )
    def test_format_duration(self, seconds: float, expected: str) -> None:
        assert format_duration(seconds) == expected
