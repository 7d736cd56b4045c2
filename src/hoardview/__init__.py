"""hoardview - Browse, preview and convert a hoard of bitmap fonts.

hoardview lists the bitmap font sources kept in a GitHub repository, renders a
sample-text preview of each one with monobit, caches listings and previews in a
local store, and converts fonts to other formats on request.

Example:
    $ hoardview gallery --output site

This will write site/index.html with a preview and download buttons for every
font in the collection.
"""

__version__ = "0.1.0"
__author__ = "Rob Hagemans"

__all__ = ["__author__", "__version__"]
