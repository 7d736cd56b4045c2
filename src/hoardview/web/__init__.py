"""Presentation and download glue for hoardview.

Key classes:
- GalleryPage: HTML gallery built with BeautifulSoup
- ShowLink: Font entry with its span and show link in the page
- DownloadButton: Download button shown with a revealed font
"""

from hoardview.web.download import download_bytes
from hoardview.web.page import DownloadButton, GalleryPage, ShowLink, download_buttons

__all__ = [
    "DownloadButton",
    "GalleryPage",
    "ShowLink",
    "download_buttons",
    "download_bytes",
]
