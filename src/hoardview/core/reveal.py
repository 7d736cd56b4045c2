"""Sequential reveal of a font collection."""

import time
import traceback
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

import structlog

from hoardview.core.orchestrator import FontOrchestrator
from hoardview.domain import DirectoryEntry, FontPreview
from hoardview.utils import RevealLogger, RevealStats


class Revealable(Protocol):
    """Anything that carries the directory entry of a font to reveal."""

    entry: DirectoryEntry


RevealCallback = Callable[[Revealable, FontPreview], Awaitable[None] | None]


async def reveal_all(
    orchestrator: FontOrchestrator,
    links: Iterable[Revealable],
    on_reveal: RevealCallback | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
    progress_callback: Callable[[int, str, bool], None] | None = None,
) -> RevealStats:
    """Render previews for a collection, one font at a time.

    Each font is awaited fully before the next one starts. A font that fails
    is logged and skipped; the remaining fonts are still revealed.

    Args:
        orchestrator: Orchestrator producing the previews
        links: Items to reveal, in display order
        on_reveal: Called with each item and its preview; may be a coroutine
        logger: Logger to use (the orchestrator's if None)
        progress_callback: Called with (completed, path, success) after each font

    Returns:
        Reveal statistics
    """
    reveal_logger = RevealLogger(logger if logger is not None else orchestrator.logger)
    stats = reveal_logger.stats
    stats.start_time = time.time()
    completed = 0

    for link in links:
        path = link.entry.path
        success = False
        reveal_logger.log_font_start(path)
        start = time.perf_counter()
        try:
            preview = await orchestrator.render_preview(link.entry)
            if on_reveal is not None:
                result = on_reveal(link, preview)
                if result is not None:
                    await result
        except Exception as e:
            reveal_logger.log_font_error(path, e, traceback.format_exc())
        else:
            success = True
            reveal_logger.log_font_revealed(
                path,
                preview.name,
                preview.cached,
                (time.perf_counter() - start) * 1000,
            )

        completed += 1
        if progress_callback is not None:
            progress_callback(completed, path, success)

    stats.end_time = time.time()
    return stats
