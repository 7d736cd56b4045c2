"""Collection builder.

Turns the flat tree listing into groups of font sources under their
directory headings.
"""

from collections.abc import Iterable, Sequence

from hoardview.domain import DirectoryEntry, FontGroup

DEFAULT_EXTENSIONS = (".yaff", ".draw")


def is_font_source(entry: DirectoryEntry, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> bool:
    """Check whether an entry is a recognised font source file."""
    return not entry.is_tree and entry.path.endswith(tuple(extensions))


def build_collection(
    tree: Iterable[DirectoryEntry],
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> list[FontGroup]:
    """Group font sources under the directory that precedes them.

    A directory entry only becomes a heading once a font source follows it,
    so directories without fonts produce no group. Font sources listed before
    any directory go in a group without heading. Listing order is kept.

    Args:
        tree: Entries in depth-first listing order
        extensions: Recognised font source extensions

    Returns:
        Non-empty font groups in listing order
    """
    groups: list[FontGroup] = []
    pending: str | None = None
    current: FontGroup | None = None

    for entry in tree:
        if entry.is_tree:
            pending = entry.path
            continue
        if not is_font_source(entry, extensions):
            continue
        if current is None or pending is not None:
            current = FontGroup(heading=pending)
            groups.append(current)
            pending = None
        current.entries.append(entry)

    return groups


def iter_fonts(groups: Iterable[FontGroup]) -> list[DirectoryEntry]:
    """Flatten groups back into the ordered list of font entries."""
    return [entry for group in groups for entry in group.entries]
