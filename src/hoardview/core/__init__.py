"""Core logic for hoardview.

This module contains:

- Collection building (grouping the tree listing by directory)
- Fetch/cache orchestration (listing, staging, preview, conversion)
- The sequential, failure-tolerant reveal loop
- Output file naming for conversions

Key functions:
- build_collection: Group font sources under directory headings
- reveal_all: Render previews for a collection
- output_names: Derive conversion output names from a suffix

Key classes:
- FontOrchestrator: Decides when to fetch, render, or reuse
"""

from hoardview.core.collection import build_collection, is_font_source, iter_fonts
from hoardview.core.naming import (
    artifact_name,
    base_name,
    font_path,
    output_names,
    output_path,
    stem,
)
from hoardview.core.orchestrator import FontOrchestrator, open_orchestrator
from hoardview.core.reveal import reveal_all

__all__ = [
    # Orchestration
    "FontOrchestrator",
    "open_orchestrator",
    "reveal_all",
    # Collection
    "build_collection",
    "is_font_source",
    "iter_fonts",
    # Naming
    "artifact_name",
    "base_name",
    "font_path",
    "output_names",
    "output_path",
    "stem",
]
