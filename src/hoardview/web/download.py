"""Saving downloaded and converted files."""

from pathlib import Path

from hoardview.core.naming import base_name


def download_bytes(directory: Path, name: str, payload: bytes) -> Path:
    """Write a payload to a directory under the base name of ``name``.

    Args:
        directory: Target directory, created if missing
        name: File name, possibly with leading path segments
        payload: File contents

    Returns:
        Path of the written file
    """
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / base_name(name)
    target.write_bytes(payload)
    return target
