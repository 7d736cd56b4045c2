"""File name helpers for staged fonts and conversion outputs."""

from hoardview.domain import DirectoryEntry


def font_path(font: DirectoryEntry | str) -> str:
    """Remote path of a font given as entry or path."""
    if isinstance(font, DirectoryEntry):
        return font.path
    return font


def base_name(path: str) -> str:
    """Last segment of a slash-separated path."""
    return path.split("/")[-1]


def stem(path: str) -> str:
    """Base name up to the first dot.

    Examples:
        "fonts/ibm/ibm-vga.yaff" -> "ibm-vga"
        "amiga/topaz.8.draw" -> "topaz"
    """
    return base_name(path).split(".")[0]


def output_names(path: str, suffix: str) -> list[str]:
    """Derive the output names for a conversion.

    Each dot-separated segment of the suffix gives one name, taken in reverse
    order, so the first name is the outermost container and the last is the
    file saved inside it.

    Args:
        path: Path of the font source
        suffix: Output suffix, e.g. "png" or "fnt.zip"

    Returns:
        Output names, outermost first
    """
    font_stem = stem(path)
    return [f"{font_stem}.{segment}" for segment in reversed(suffix.split("."))]


def output_path(path: str, suffix: str) -> str:
    """Path a conversion is saved under, e.g. "topaz.zip/topaz.fnt"."""
    return "/".join(output_names(path, suffix))


def artifact_name(path: str, suffix: str) -> str:
    """Name of the file read back after a conversion, e.g. "topaz.zip"."""
    return output_names(path, suffix)[0]
