"""Tests for fetch/cache orchestration."""

import asyncio

import pytest
from fakes import FakeSession, FakeSource

from hoardview.core import FontOrchestrator
from hoardview.domain import DirectoryEntry, EntryType, RenderedRecord
from hoardview.exceptions import FontLoadError, RemoteFetchError
from hoardview.io import FontCache, JsonStore


class TestDirectoryListing:
    """Tests for the TTL-cached directory listing."""

    def test_first_call_fetches_and_stores(self, orchestrator, source, cache, clock):
        """Test that an empty cache triggers one fetch and stores the result."""
        tree = asyncio.run(orchestrator.get_directory_listing())

        assert source.tree_calls == 1
        assert tree == source.tree
        assert cache.listing is not None
        assert cache.listing.fetched_at == clock.now
        assert cache.listing.tree == tree

    def test_second_call_within_hour_uses_cache(self, orchestrator, source, clock):
        """Test that a fresh listing is reused without network access."""

        async def scenario():
            first = await orchestrator.get_directory_listing()
            clock.advance(3599)
            second = await orchestrator.get_directory_listing()
            return first, second

        first, second = asyncio.run(scenario())

        assert source.tree_calls == 1
        assert first == second

    def test_call_after_hour_refreshes(self, orchestrator, source, cache, clock):
        """Test that an expired listing is refetched and overwritten."""

        async def scenario():
            await orchestrator.get_directory_listing()
            source.tree.append(DirectoryEntry("new/font.yaff", EntryType.BLOB))
            clock.advance(3600)
            return await orchestrator.get_directory_listing()

        tree = asyncio.run(scenario())

        assert source.tree_calls == 2
        assert tree[-1].path == "new/font.yaff"
        assert cache.listing.fetched_at == clock.now
        assert cache.listing.tree == tree

    def test_listing_survives_restart(self, settings, source, session, clock):
        """Test that a listing stored by one run is reused by the next."""
        first_cache = FontCache(JsonStore(settings.cache.store_path))
        first = FontOrchestrator(source, session, first_cache, settings, clock=clock)
        asyncio.run(first.get_directory_listing())

        second_cache = FontCache(JsonStore(settings.cache.store_path))
        second = FontOrchestrator(source, FakeSession(), second_cache, settings, clock=clock)
        clock.advance(60)
        tree = asyncio.run(second.get_directory_listing())

        assert source.tree_calls == 1
        assert tree == source.tree

    def test_fetch_failure_propagates(self, settings, session, cache, clock):
        """Test that a failing listing request is not retried or cached."""
        source = FakeSource(failing={"tree"})
        orchestrator = FontOrchestrator(source, session, cache, settings, clock=clock)

        with pytest.raises(RemoteFetchError):
            asyncio.run(orchestrator.get_directory_listing())

        assert source.tree_calls == 1
        assert cache.listing is None


class TestEnsureStaged:
    """Tests for staging font sources into the engine session."""

    def test_stages_under_base_name(self, orchestrator, source, session):
        """Test that the source is fetched and written under its base name."""
        name = asyncio.run(orchestrator.ensure_staged("amiga/topaz.yaff"))

        assert name == "topaz.yaff"
        assert source.raw_calls == ["amiga/topaz.yaff"]
        assert session.files["topaz.yaff"] == b"source of amiga/topaz.yaff"

    def test_idempotent(self, orchestrator, source, session):
        """Test that staging twice writes once and fetches at most once."""

        async def scenario():
            await orchestrator.ensure_staged("amiga/topaz.yaff")
            await orchestrator.ensure_staged(DirectoryEntry("amiga/topaz.yaff", EntryType.BLOB))

        asyncio.run(scenario())

        assert session.writes == ["topaz.yaff"]
        assert len(source.raw_calls) == 1

    def test_already_staged_skips_network(self, orchestrator, source, session):
        """Test that an existing staged file is reused without fetching."""
        session.files["vga.yaff"] = b"staged"

        asyncio.run(orchestrator.ensure_staged("ibm/vga.yaff"))

        assert source.raw_calls == []
        assert session.writes == []

    def test_concurrent_staging_writes_once(self, orchestrator, source, session):
        """Test that overlapping staging requests for one font write once."""

        async def scenario():
            await asyncio.gather(
                orchestrator.ensure_staged("ibm/vga.yaff"),
                orchestrator.ensure_staged("ibm/vga.yaff"),
            )

        asyncio.run(scenario())

        assert session.writes == ["vga.yaff"]
        assert source.raw_calls == ["ibm/vga.yaff"]


class TestRenderPreview:
    """Tests for cached preview rendering."""

    def test_first_render_stages_and_renders(self, orchestrator, source, session, cache):
        """Test that a new font costs one fetch and one engine render."""
        preview = asyncio.run(orchestrator.render_preview("amiga/topaz.yaff"))

        assert source.raw_calls == ["amiga/topaz.yaff"]
        assert session.render_calls == ["topaz.yaff"]
        assert preview.name == "Font topaz.yaff"
        assert preview.path == "topaz.yaff"
        assert preview.image == b"\x89PNG\r\ntopaz.yaff"
        assert not preview.cached
        assert cache.get_rendered("amiga/topaz.yaff") is not None

    def test_second_render_uses_cache(self, orchestrator, source, session):
        """Test that a rendered font is served without network or engine."""

        async def scenario():
            first = await orchestrator.render_preview("amiga/topaz.yaff")
            second = await orchestrator.render_preview("amiga/topaz.yaff")
            return first, second

        first, second = asyncio.run(scenario())

        assert len(source.raw_calls) == 1
        assert len(session.render_calls) == 1
        assert second.cached
        assert (second.name, second.image, second.path) == (first.name, first.image, first.path)
        assert second.image_url == first.image_url

    def test_cached_preview_needs_no_staging(self, settings, clock):
        """Test that a preview stored by an earlier run needs no staging."""
        cache = FontCache(JsonStore(settings.cache.store_path))
        cache.put_rendered("ibm/vga.yaff", RenderedRecord.from_image("VGA", b"\x00\x01png"))
        source = FakeSource()
        session = FakeSession()
        orchestrator = FontOrchestrator(source, session, cache, settings, clock=clock)

        preview = asyncio.run(orchestrator.render_preview("ibm/vga.yaff"))

        assert preview.name == "VGA"
        assert preview.image == b"\x00\x01png"
        assert source.raw_calls == []
        assert session.writes == []
        assert session.render_calls == []

    def test_empty_record_is_rerendered(self, orchestrator, session, cache):
        """Test that an empty stored record does not count as a hit."""
        cache.put_rendered("ibm/vga.yaff", RenderedRecord(name="", image=""))

        preview = asyncio.run(orchestrator.render_preview("ibm/vga.yaff"))

        assert session.render_calls == ["vga.yaff"]
        assert preview.name == "Font vga.yaff"

    def test_failure_is_not_cached(self, settings, source, cache, clock):
        """Test that a failing font is retried on the next view."""
        session = FakeSession(unloadable={"vga.yaff"})
        orchestrator = FontOrchestrator(source, session, cache, settings, clock=clock)

        async def scenario():
            for _ in range(2):
                with pytest.raises(FontLoadError):
                    await orchestrator.render_preview("ibm/vga.yaff")

        asyncio.run(scenario())

        assert session.render_calls == ["vga.yaff", "vga.yaff"]
        assert source.raw_calls == ["ibm/vga.yaff"]
        assert cache.get_rendered("ibm/vga.yaff") is None


class TestConvertAndFetch:
    """Tests for font conversion."""

    def test_single_suffix(self, orchestrator, session):
        """Test that a plain suffix saves and reads back one file."""
        converted = asyncio.run(orchestrator.convert_and_fetch("ibm/vga.yaff", "png", "image"))

        assert session.save_calls == [("vga.yaff", "vga.png", "image")]
        assert converted.name == "vga.png"
        assert converted.data == b"image:vga.png"

    def test_nested_suffix(self, orchestrator, session):
        """Test that a dotted suffix saves inside a container and reads the container."""
        converted = asyncio.run(
            orchestrator.convert_and_fetch("amiga/topaz.8.draw", "fnt.zip", "bmfont.zip")
        )

        assert session.save_calls == [("topaz.8.draw", "topaz.zip/topaz.fnt", "bmfont.zip")]
        assert converted.name == "topaz.zip"

    def test_never_cached(self, orchestrator, source, session):
        """Test that every conversion runs the engine while staging happens once."""

        async def scenario():
            await orchestrator.convert_and_fetch("ibm/vga.yaff", "bdf", "bdf")
            await orchestrator.convert_and_fetch("ibm/vga.yaff", "bdf", "bdf")

        asyncio.run(scenario())

        assert len(session.save_calls) == 2
        assert source.raw_calls == ["ibm/vga.yaff"]

    def test_conversion_without_preview(self, orchestrator, cache):
        """Test that conversion does not require or create a preview."""
        asyncio.run(orchestrator.convert_and_fetch("ibm/vga.yaff", "yaff", "yaff"))

        assert cache.get_rendered("ibm/vga.yaff") is None

    def test_failure_propagates(self, settings, source, cache, clock):
        """Test that an engine failure reaches the caller."""
        session = FakeSession(unloadable={"vga.yaff"})
        orchestrator = FontOrchestrator(source, session, cache, settings, clock=clock)

        with pytest.raises(FontLoadError):
            asyncio.run(orchestrator.convert_and_fetch("ibm/vga.yaff", "bdf", "bdf"))


class TestFetchSource:
    """Tests for raw source download."""

    def test_fetches_every_time(self, orchestrator, source, session):
        """Test that source downloads bypass staging."""

        async def scenario():
            await orchestrator.fetch_source("ibm/vga.yaff")
            return await orchestrator.fetch_source("ibm/vga.yaff")

        result = asyncio.run(scenario())

        assert result.name == "vga.yaff"
        assert result.data == b"source of ibm/vga.yaff"
        assert source.raw_calls == ["ibm/vga.yaff", "ibm/vga.yaff"]
        assert session.writes == []
