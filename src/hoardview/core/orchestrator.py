"""Fetch/cache orchestration.

This module decides, for each font, whether to hit the network, whether to
run the font engine, and when a stored result can be reused:

- Directory listings are reused until they reach the configured age
- Font sources are staged into the engine session once per session
- Previews are rendered once and then served from the cache store
- Conversions always run the engine

Operations are coroutines. Network and engine calls run in a worker thread
and are awaited one at a time; callers process fonts sequentially.
"""

import asyncio
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import structlog

from hoardview.config import ViewerSettings
from hoardview.core.naming import artifact_name, base_name, font_path, output_path
from hoardview.domain import (
    ConvertedFont,
    DirectoryEntry,
    FontPreview,
    ListingRecord,
    RenderedRecord,
    is_listing_fresh,
)
from hoardview.engine import EngineSession
from hoardview.io import FontCache, GithubFontSource, JsonStore


class FontOrchestrator:
    """Mediates between remote source, engine session and cache store.

    Example:
        orchestrator = FontOrchestrator(source, session, cache, settings)
        tree = await orchestrator.get_directory_listing()
        preview = await orchestrator.render_preview("ibm/ibm-vga.yaff")
        converted = await orchestrator.convert_and_fetch(
            "ibm/ibm-vga.yaff", "bdf", "bdf"
        )
    """

    def __init__(
        self,
        source: GithubFontSource,
        session: EngineSession,
        cache: FontCache,
        settings: ViewerSettings,
        clock: Callable[[], float] = time.time,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            source: Remote font source
            session: Ready engine session
            cache: Listing and preview cache
            settings: Application settings
            clock: Source of the current time in seconds since the epoch
            logger: Logger to use (the hoardview logger if None)
        """
        self.source = source
        self.session = session
        self.cache = cache
        self.settings = settings
        self.clock = clock
        self.logger = logger if logger is not None else structlog.get_logger("hoardview")
        self._staging_lock = asyncio.Lock()

    async def get_directory_listing(self) -> list[DirectoryEntry]:
        """Return the repository tree, from cache while it is fresh.

        Returns:
            Directory entries in listing order

        Raises:
            RemoteFetchError: If a refresh is needed and the request fails
        """
        record = self.cache.listing
        ttl = self.settings.cache.listing_ttl_seconds
        if record is not None and is_listing_fresh(record, self.clock(), ttl):
            self.logger.debug("Using cached listing", entries=len(record.tree))
            return record.tree

        self.logger.info("Refreshing directory listing", url=self.settings.remote.tree_url)
        tree = await asyncio.to_thread(self.source.fetch_tree)
        self.cache.listing = ListingRecord(tree=tree, fetched_at=self.clock())
        return tree

    async def ensure_staged(self, font: DirectoryEntry | str) -> str:
        """Make a font source available in the engine session.

        The source is fetched and written only if no file with its base
        name has been staged yet.

        Args:
            font: Font entry or remote path

        Returns:
            Base name the font is staged under

        Raises:
            RemoteFetchError: If the source has to be fetched and the request fails
        """
        path = font_path(font)
        name = base_name(path)
        async with self._staging_lock:
            if not self.session.exists(name):
                data = await asyncio.to_thread(self.source.fetch_raw, path)
                self.session.write_file(name, data)
                self.logger.debug("Font staged", font=path, staged=name, size=len(data))
        return name

    async def render_preview(self, font: DirectoryEntry | str) -> FontPreview:
        """Produce the preview of a font.

        A stored preview is returned without touching network or engine.
        Otherwise the font is staged, rendered and the result stored under
        the font's remote path. Failures are not stored.

        Args:
            font: Font entry or remote path

        Returns:
            Font name, PNG preview and base name

        Raises:
            RemoteFetchError: If staging fails
            FontLoadError: If the engine cannot load the font
            FontRenderError: If the engine cannot render the sample
        """
        path = font_path(font)
        record = self.cache.get_rendered(path)
        if record is not None and not record.is_empty():
            return FontPreview(
                name=record.name,
                image=record.image_bytes(),
                path=base_name(path),
                cached=True,
            )

        name = await self.ensure_staged(path)
        rendered = await asyncio.to_thread(self.session.render, name, self.settings.render)
        record = RenderedRecord.from_image(rendered.name, rendered.image)
        self.cache.put_rendered(path, record)
        self.logger.info("Font rendered", font=path, name=rendered.name)
        return FontPreview(name=rendered.name, image=record.image_bytes(), path=name)

    async def convert_and_fetch(
        self,
        font: DirectoryEntry | str,
        suffix: str,
        format: str,
    ) -> ConvertedFont:
        """Convert a font and return the resulting file.

        Args:
            font: Font entry or remote path
            suffix: Output suffix; "fnt.zip" saves a .fnt inside a .zip
            format: monobit format tag

        Returns:
            The outermost output file and its contents

        Raises:
            RemoteFetchError: If staging fails
            FontLoadError: If the engine cannot load the font
            FontSaveError: If the engine cannot save in the format
        """
        path = font_path(font)
        name = await self.ensure_staged(path)
        target = output_path(name, suffix)
        await asyncio.to_thread(self.session.save, name, target, format)
        artifact = artifact_name(name, suffix)
        data = self.session.read_output(artifact)
        self.logger.info("Font converted", font=path, format=format, output=artifact)
        return ConvertedFont(name=artifact, data=data)

    async def fetch_source(self, font: DirectoryEntry | str) -> ConvertedFont:
        """Download the original source file of a font.

        Args:
            font: Font entry or remote path

        Returns:
            Base name and raw contents of the source
        """
        path = font_path(font)
        data = await asyncio.to_thread(self.source.fetch_raw, path)
        return ConvertedFont(name=base_name(path), data=data)


@asynccontextmanager
async def open_orchestrator(
    settings: ViewerSettings,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> AsyncIterator[FontOrchestrator]:
    """Start an engine session and wire up an orchestrator around it.

    The session and the HTTP connection are closed on exit.

    Args:
        settings: Application settings
        logger: Logger to use (the hoardview logger if None)

    Yields:
        Ready orchestrator
    """
    source = GithubFontSource(settings.remote)
    cache = FontCache(JsonStore(settings.cache.store_path))
    try:
        async with EngineSession(settings.engine, logger) as session:
            yield FontOrchestrator(source, session, cache, settings, logger=logger)
    finally:
        source.close()
