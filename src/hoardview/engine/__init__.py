"""Font engine for hoardview.

Key classes:
- EngineSession: monobit-backed engine with a staging filesystem
- RenderedFont: Name and PNG bytes of a rendered preview
"""

from hoardview.engine.session import (
    EngineSession,
    RenderedFont,
    SessionState,
    choose_sample,
)

__all__ = [
    "EngineSession",
    "RenderedFont",
    "SessionState",
    "choose_sample",
]
