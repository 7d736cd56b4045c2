"""Cache records and orchestrator results."""

import base64
from dataclasses import dataclass
from typing import Any

from hoardview.domain.entries import DirectoryEntry


@dataclass
class ListingRecord:
    """Cached directory listing with the time it was fetched.

    Attributes:
        tree: Entries of the recursive tree listing
        fetched_at: Fetch time in seconds since the epoch
    """

    tree: list[DirectoryEntry]
    fetched_at: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "tree": [entry.to_dict() for entry in self.tree],
            "fetched_at": self.fetched_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ListingRecord":
        return cls(
            tree=[DirectoryEntry.from_dict(item) for item in data["tree"]],
            fetched_at=float(data["fetched_at"]),
        )


def is_listing_fresh(record: ListingRecord | None, now: float, ttl: float) -> bool:
    """Check whether a cached listing may still be used.

    Args:
        record: Cached listing, or None if nothing is stored
        now: Current time in seconds since the epoch
        ttl: Maximum age in seconds

    Returns:
        True if the record exists and is younger than ``ttl``
    """
    if record is None:
        return False
    return now - record.fetched_at < ttl


@dataclass
class RenderedRecord:
    """Cached preview of a font.

    Attributes:
        name: Font name as declared by the font
        image: Base64 text of the PNG preview
    """

    name: str
    image: str

    @classmethod
    def from_image(cls, name: str, image: bytes) -> "RenderedRecord":
        """Create a record from raw PNG bytes."""
        return cls(name=name, image=base64.b64encode(image).decode("ascii"))

    def image_bytes(self) -> bytes:
        """Decode the stored preview back to PNG bytes."""
        return base64.b64decode(self.image)

    def is_empty(self) -> bool:
        return not self.image

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "image": self.image}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderedRecord":
        return cls(name=data.get("name", ""), image=data.get("image", ""))


@dataclass(frozen=True)
class FontPreview:
    """Rendered preview of a font, ready for display.

    Attributes:
        name: Font name as declared by the font
        image: PNG bytes of the upscaled sample
        path: Base name of the font source file
        cached: Whether the preview came from the cache store
    """

    name: str
    image: bytes
    path: str
    cached: bool = False

    @property
    def image_url(self) -> str:
        """Data URL that displays the preview image."""
        encoded = base64.b64encode(self.image).decode("ascii")
        return f"data:image/png;base64,{encoded}"


@dataclass(frozen=True)
class ConvertedFont:
    """File produced for download.

    Attributes:
        name: File name of the artifact
        data: Contents of the artifact
    """

    name: str
    data: bytes


@dataclass(frozen=True)
class OutputFormat:
    """Conversion target offered for each font.

    Attributes:
        label: Button label (e.g., "BDF")
        suffix: File suffix; dotted suffixes nest, innermost last (e.g., "fnt.zip")
        format: monobit format tag passed to the saver
    """

    label: str
    suffix: str
    format: str


DEFAULT_OUTPUT_FORMATS: tuple[OutputFormat, ...] = (
    OutputFormat("PNG", "png", "image"),
    OutputFormat("OTB", "otb", "sfnt"),
    OutputFormat("BDF", "bdf", "bdf"),
    OutputFormat("FON", "fon", "mzfon"),
    OutputFormat("BMFONT", "fnt.zip", "bmfont.zip"),
    OutputFormat("YAFF", "yaff", "yaff"),
)
