"""Domain models for hoardview.

This module contains the data passed between the remote source, the cache
store, the font engine and the presentation layer:

- Plain dataclasses with ``to_dict``/``from_dict`` for the cache store
- Frozen where the value never changes after creation
- Independent of requests, monobit and BeautifulSoup

Key classes:
- DirectoryEntry: A node of the remote tree listing
- FontGroup: Font entries under one directory heading
- ListingRecord: Cached tree listing with fetch time
- RenderedRecord: Cached preview (name and base64 image)
- FontPreview: Preview returned to callers
- ConvertedFont: Conversion or download artifact
- OutputFormat: Conversion target
"""

from hoardview.domain.entries import DirectoryEntry, EntryType, FontGroup
from hoardview.domain.records import (
    DEFAULT_OUTPUT_FORMATS,
    ConvertedFont,
    FontPreview,
    ListingRecord,
    OutputFormat,
    RenderedRecord,
    is_listing_fresh,
)

__all__: list[str] = [
    "DEFAULT_OUTPUT_FORMATS",
    # Enums
    "EntryType",
    # Listing
    "DirectoryEntry",
    "FontGroup",
    "ListingRecord",
    "is_listing_fresh",
    # Rendering and conversion
    "RenderedRecord",
    "FontPreview",
    "ConvertedFont",
    "OutputFormat",
]
