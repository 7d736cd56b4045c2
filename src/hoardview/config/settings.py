"""Configuration settings for hoardview."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from hoardview.domain import DEFAULT_OUTPUT_FORMATS, OutputFormat
from hoardview.exceptions import UnknownFormatError

CACHE_DIR_ENV = "HOARDVIEW_CACHE_DIR"


def default_cache_dir() -> Path:
    """Return the cache directory, honouring HOARDVIEW_CACHE_DIR."""
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / ".cache" / "hoardview"


class RemoteConfig(BaseModel):
    """Location of the font repository on GitHub."""

    owner: str = Field(default="robhagemans", description="Repository owner")
    repository: str = Field(default="hoard-of-bitfonts", description="Repository name")
    branch: str = Field(default="master", description="Branch to list and download from")
    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub API root, used for the (rate-limited) tree listing",
    )
    raw_url: str = Field(
        default="https://raw.githubusercontent.com",
        description="Raw content root, used for file downloads",
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        le=600.0,
        description="HTTP timeout in seconds",
    )

    @property
    def tree_url(self) -> str:
        """URL of the recursive tree listing."""
        return (
            f"{self.api_url}/repos/{self.owner}/{self.repository}"
            f"/git/trees/{self.branch}?recursive=1"
        )

    def raw_file_url(self, path: str) -> str:
        """URL of the raw contents of a file in the repository."""
        return f"{self.raw_url}/{self.owner}/{self.repository}/{self.branch}/{path}"


class CacheConfig(BaseModel):
    """Local cache store settings."""

    cache_dir: Path = Field(
        default_factory=default_cache_dir,
        description="Directory holding the cache store",
    )
    store_name: str = Field(
        default="store.json",
        description="File name of the key-value store inside cache_dir",
    )
    listing_ttl_seconds: float = Field(
        default=3600.0,
        ge=0.0,
        description="How long a directory listing is reused before refetching",
    )

    @property
    def store_path(self) -> Path:
        return self.cache_dir / self.store_name


class RenderConfig(BaseModel):
    """Preview rendering settings."""

    sample_text: str = Field(
        default="A quick brown fox jumps over the lazy dog.",
        min_length=1,
        description="Text rendered in each preview",
    )
    scale: int = Field(
        default=2,
        ge=1,
        le=8,
        description="Nearest-neighbour upscale factor for previews",
    )
    probe_glyphs: list[str] = Field(
        default_factory=lambda: ["A", "a"],
        description="Glyphs that must exist for the sample to be rendered as text",
    )
    fallback_encoding: str = Field(
        default="latin-1",
        description="Encoding used for the sample when a probe glyph is missing",
    )


class CollectionConfig(BaseModel):
    """Which repository files count as font sources."""

    extensions: list[str] = Field(
        default_factory=lambda: [".yaff", ".draw"],
        description="Recognised font source extensions",
    )


class EngineConfig(BaseModel):
    """Font engine session settings."""

    staging_dir: Path | None = Field(
        default=None,
        description="Directory for staged fonts and outputs (None = temporary)",
    )
    required_modules: list[str] = Field(
        default_factory=lambda: ["monobit", "PIL", "fontTools"],
        description="Modules that must import for the session to become ready",
    )
    optional_modules: list[str] = Field(
        default_factory=lambda: ["lzma", "bz2"],
        description="Modules probed in the background for optional formats",
    )


class ConversionConfig(BaseModel):
    """Conversion targets offered for each font."""

    formats: list[OutputFormat] = Field(
        default_factory=lambda: list(DEFAULT_OUTPUT_FORMATS),
        description="Output formats in button order",
    )

    def get_format(self, label: str) -> OutputFormat:
        """Look up a format by label or suffix, case-insensitively.

        Args:
            label: Format label (e.g., "bdf") or suffix (e.g., "fnt.zip")

        Returns:
            The matching output format

        Raises:
            UnknownFormatError: If no configured format matches
        """
        wanted = label.lower()
        for fmt in self.formats:
            if fmt.label.lower() == wanted or fmt.suffix.lower() == wanted:
                return fmt
        raise UnknownFormatError(label)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ViewerSettings(BaseModel):
    """Main application settings."""

    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ViewerSettings:
    """Get default application settings."""
    return ViewerSettings()
