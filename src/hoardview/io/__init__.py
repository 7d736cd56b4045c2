"""I/O layer for hoardview.

This module handles everything that leaves the process apart from the
font engine: the remote GitHub repository and the local cache store.

Key classes:
- GithubFontSource: Tree listing and raw file downloads
- JsonStore: String key-value store persisted as JSON
- FontCache: Typed listing and preview cache over a JsonStore
"""

from hoardview.io.remote import GithubFontSource
from hoardview.io.store import FontCache, JsonStore

__all__ = [
    "FontCache",
    "GithubFontSource",
    "JsonStore",
]
