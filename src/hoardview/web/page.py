"""Static gallery page.

GalleryPage builds the HTML document with BeautifulSoup: a heading per
directory, a paragraph per font with a show link, and, once a font is
revealed, its name, preview image and a row of download buttons.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from hoardview.core.naming import artifact_name, base_name
from hoardview.domain import DirectoryEntry, FontGroup, FontPreview, OutputFormat

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title></title>
<style>
body { font-family: sans-serif; }
img { image-rendering: pixelated; display: block; margin: 0.5em 0; }
a.button { border: 1px solid #888; border-radius: 3px; padding: 0 0.4em; margin-right: 0.3em;
           text-decoration: none; color: inherit; font-size: small; }
</style>
</head>
<body>
<h1></h1>
<div id="font-list"></div>
</body>
</html>
"""

EMSP = "\u2003"
DOWN_TRIANGLE = "\u25be"


@dataclass
class ShowLink:
    """A font entry paired with its place in the page.

    Attributes:
        entry: Directory entry of the font source
        element: Span that receives the font name once revealed
        anchor: Show link, replaced by the preview image once revealed
    """

    entry: DirectoryEntry
    element: Tag
    anchor: Tag


@dataclass(frozen=True)
class DownloadButton:
    """Download button shown with a revealed font."""

    label: str
    href: str


def download_buttons(
    path: str,
    formats: Iterable[OutputFormat],
    directory: str = "downloads",
) -> list[DownloadButton]:
    """Buttons linking to the converted files of a font.

    Converted files live in a directory named after the font path, so fonts
    that share a stem never share a download.

    Args:
        path: Path of the font source
        formats: Output formats in button order
        directory: Directory of the converted files, relative to the page

    Returns:
        One button per format
    """
    return [
        DownloadButton(fmt.label, f"{directory}/{path}/{artifact_name(path, fmt.suffix)}")
        for fmt in formats
    ]


class GalleryPage:
    """HTML gallery of a font collection."""

    def __init__(
        self,
        title: str = "Hoard of bitfonts",
        source_url: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize an empty page.

        Args:
            title: Page title and top heading
            source_url: Maps a font path to the URL its show link points at
        """
        self.soup = BeautifulSoup(PAGE_TEMPLATE, "html.parser")
        self.soup.title.string = title
        self.soup.h1.string = title
        self._font_list = self.soup.find(id="font-list")
        self._source_url = source_url

    def add_heading(self, text: str) -> Tag:
        h2 = self.soup.new_tag("h2")
        h2.string = text
        self._font_list.append(h2)
        return h2

    def add_font(self, entry: DirectoryEntry) -> ShowLink:
        """Append a paragraph with a show link for a font."""
        p = self.soup.new_tag("p")
        span = self.soup.new_tag("span")
        p.append(span)
        p.append(self.soup.new_tag("br"))
        a = self.soup.new_tag("a")
        if self._source_url is not None:
            a["href"] = self._source_url(entry.path)
        a.string = base_name(entry.path)
        p.append(a)
        self._font_list.append(p)
        return ShowLink(entry=entry, element=span, anchor=a)

    def build_collection(self, groups: Sequence[FontGroup]) -> list[ShowLink]:
        """Lay out the collection and return the show links in page order."""
        links = []
        for group in groups:
            if group.heading is not None:
                self.add_heading(group.heading)
            for entry in group.entries:
                links.append(self.add_font(entry))
        return links

    def reveal(
        self,
        link: ShowLink,
        preview: FontPreview,
        buttons: Sequence[DownloadButton] = (),
    ) -> Tag:
        """Replace a show link with the font's name, preview and buttons.

        Args:
            link: Show link to reveal
            preview: Rendered preview of the font
            buttons: Download buttons, placed before the name

        Returns:
            The preview image element
        """
        link.element.clear()
        link.element.append(preview.name + EMSP)
        italic = self.soup.new_tag("i")
        italic.string = preview.path
        link.element.append(italic)

        image = self.soup.new_tag("img", src=preview.image_url, alt=preview.name)
        link.anchor.replace_with(image)

        for button in buttons:
            link.element.insert_before(self._button_tag(button))
        return image

    def _button_tag(self, button: DownloadButton) -> Tag:
        a = self.soup.new_tag("a", href=button.href, download="")
        a["class"] = ["button", "download"]
        a.string = f"{DOWN_TRIANGLE} {button.label}"
        return a

    def render(self) -> str:
        """Return the page as HTML text."""
        return str(self.soup)
