"""Font engine session.

This module owns the font engine: monobit for loading, rendering and saving
fonts, Pillow for scaling and encoding previews, and a staging directory that
plays the part of the engine's filesystem. Fonts are staged there under their
base name; conversion outputs go to a separate subdirectory.

The session has an explicit lifecycle (created, ready, closed) and is passed
to whoever needs the engine instead of living in a module global.
"""

import asyncio
import importlib
import io
import shutil
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import monobit
import structlog
from PIL import Image

from hoardview.config import EngineConfig, RenderConfig
from hoardview.exceptions import (
    EngineError,
    EngineStateError,
    FontLoadError,
    FontRenderError,
    FontSaveError,
)


OUTPUT_DIR = "converted"


class SessionState(str, Enum):
    """Lifecycle state of an engine session."""

    CREATED = "created"
    READY = "ready"
    CLOSED = "closed"


@dataclass(frozen=True)
class RenderedFont:
    """Result of a preview render.

    Attributes:
        name: Font name as declared by the font
        image: PNG bytes of the upscaled sample
    """

    name: str
    image: bytes


def choose_sample(
    font: Any,
    sample: str,
    probe_glyphs: list[str],
    fallback_encoding: str,
) -> str | bytes:
    """Pick the form of the sample text a font can render.

    Fonts that lack the probe glyphs often have no Unicode mapping at all;
    those get the sample as single-byte codepoints instead.

    Args:
        font: Loaded monobit font
        sample: Sample text
        probe_glyphs: Labels looked up to test for text support
        fallback_encoding: Encoding for the codepoint fallback

    Returns:
        The sample as text, or encoded to bytes if any probe glyph is missing
    """
    try:
        for label in probe_glyphs:
            font.get_glyph(label)
    except KeyError:
        return sample.encode(fallback_encoding)
    return sample


class EngineSession:
    """Font engine with its staging filesystem.

    Example:
        async with EngineSession(EngineConfig()) as session:
            session.write_file("font.yaff", data)
            rendered = session.render("font.yaff", RenderConfig())
    """

    def __init__(
        self,
        config: EngineConfig,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger if logger is not None else structlog.get_logger("hoardview.engine")
        self._state = SessionState.CREATED
        self._root: Path | None = None
        self._owns_root = False
        self._optional_task: asyncio.Task[list[str]] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def root(self) -> Path:
        """Staging directory of the session.

        Raises:
            EngineStateError: If the session is not ready
        """
        if self._state is not SessionState.READY or self._root is None:
            raise EngineStateError(self._state.value, SessionState.READY.value)
        return self._root

    async def start(self) -> "EngineSession":
        """Bring the session to the ready state.

        Required modules must import; optional format modules are probed
        in a background task that never holds up the caller.

        Returns:
            The session itself

        Raises:
            EngineStateError: If the session was already started
            EngineError: If a required module is unavailable
        """
        if self._state is not SessionState.CREATED:
            raise EngineStateError(self._state.value, SessionState.CREATED.value)

        for module in self._config.required_modules:
            try:
                importlib.import_module(module)
            except ImportError as e:
                raise EngineError(f"Required module '{module}' unavailable: {e}") from e

        if self._config.staging_dir is None:
            self._root = Path(tempfile.mkdtemp(prefix="hoardview-"))
            self._owns_root = True
        else:
            self._root = self._config.staging_dir
            self._root.mkdir(parents=True, exist_ok=True)

        self._state = SessionState.READY
        self._logger.info("Engine session ready", root=str(self._root))

        # best effort, result discarded
        self._optional_task = asyncio.create_task(self._probe_optional_modules())
        self._optional_task.add_done_callback(self._on_probe_done)
        return self

    async def close(self) -> None:
        """Tear down the session, removing a temporary staging directory."""
        if self._state is SessionState.CLOSED:
            return
        if self._optional_task is not None and not self._optional_task.done():
            self._optional_task.cancel()
            await asyncio.gather(self._optional_task, return_exceptions=True)
        if self._owns_root and self._root is not None:
            shutil.rmtree(self._root, ignore_errors=True)
        self._state = SessionState.CLOSED
        self._logger.info("Engine session closed")

    async def __aenter__(self) -> "EngineSession":
        return await self.start()

    async def __aexit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        await self.close()

    async def _probe_optional_modules(self) -> list[str]:
        available = []
        for module in self._config.optional_modules:
            try:
                await asyncio.to_thread(importlib.import_module, module)
            except ImportError as e:
                self._logger.warning("Optional module unavailable", module=module, error=str(e))
            else:
                available.append(module)
        return available

    def _on_probe_done(self, task: "asyncio.Task[list[str]]") -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.warning("Optional module probe failed", error=str(error))
        else:
            self._logger.debug("Optional modules available", modules=task.result())

    def path_for(self, name: str) -> Path:
        """Location of a file in the staging directory."""
        return self.root / name.lstrip("/")

    def output_path_for(self, name: str) -> Path:
        """Location of a conversion output, kept apart from staged sources."""
        return self.root / OUTPUT_DIR / name.lstrip("/")

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def write_file(self, name: str, data: bytes) -> Path:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def read_file(self, name: str) -> bytes:
        return self.path_for(name).read_bytes()

    def read_output(self, name: str) -> bytes:
        return self.output_path_for(name).read_bytes()

    def load(self, name: str) -> Any:
        """Load the first font from a staged file.

        Args:
            name: Staged file name

        Returns:
            monobit Font

        Raises:
            FontLoadError: If monobit cannot load the file
        """
        path = self.path_for(name)
        try:
            font, *_ = monobit.load(str(path))
        except Exception as e:
            raise FontLoadError(name, str(e)) from e
        return font

    def render(self, name: str, config: RenderConfig) -> RenderedFont:
        """Render the sample text with a staged font.

        Args:
            name: Staged file name
            config: Sample text, scale and encoding fallback

        Returns:
            Font name and PNG bytes of the sample scaled by ``config.scale``

        Raises:
            FontLoadError: If the font cannot be loaded
            FontRenderError: If the sample cannot be rendered
        """
        self._logger.debug("Rendering font", font=name)
        font = self.load(name)
        sample = choose_sample(
            font, config.sample_text, config.probe_glyphs, config.fallback_encoding
        )
        try:
            image = monobit.render(font, sample, direction="ltr f").as_image()
            image = image.resize(
                (image.width * config.scale, image.height * config.scale),
                resample=Image.NEAREST,
            )
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except Exception as e:
            raise FontRenderError(name, str(e)) from e
        return RenderedFont(name=str(font.name), image=buffer.getvalue())

    def save(self, name: str, output_name: str, format: str) -> Path:
        """Save a staged font in another format.

        Args:
            name: Staged file name
            output_name: Output path relative to the output directory
            format: monobit format tag

        Returns:
            Location of the saved output

        Raises:
            FontLoadError: If the font cannot be loaded
            FontSaveError: If monobit cannot save in the requested format
        """
        self._logger.debug("Saving font", font=name, output=output_name, format=format)
        font = self.load(name)
        output_path = self.output_path_for(output_name)
        (self.root / OUTPUT_DIR).mkdir(exist_ok=True)
        try:
            monobit.save(font, str(output_path), format=format, overwrite=True)
        except Exception as e:
            raise FontSaveError(output_name, str(e)) from e
        return output_path
