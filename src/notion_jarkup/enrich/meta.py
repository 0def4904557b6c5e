"""HTML metadata extraction.

:func:`extract_metadata` pulls the title, description, preview image and
favicon reference out of an HTML document.  It never raises on malformed
markup; anything it cannot find is ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag


@dataclass(frozen=True)
class PageMetadata:
    """Metadata of one fetched page.

    ``favicon`` is the raw ``href`` as written in the document when
    returned by :func:`extract_metadata`, and an absolute URL when
    returned by :meth:`MetadataEnricher.fetch_metadata`.
    """

    title: str | None = None
    description: str | None = None
    image: str | None = None
    favicon: str | None = None


def _clean(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if isinstance(tag, Tag):
        return _clean(tag.get("content"))
    return None


def _rel_tokens(tag: Tag) -> list[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [token.lower() for token in rel]


def _favicon_ref(soup: BeautifulSoup) -> str | None:
    touch_icon: str | None = None
    for link in soup.find_all("link", href=True):
        tokens = _rel_tokens(link)
        if "icon" in tokens:
            href = _clean(link.get("href"))
            if href:
                return href
        elif touch_icon is None and "apple-touch-icon" in tokens:
            touch_icon = _clean(link.get("href"))
    return touch_icon


def extract_metadata(html: str) -> PageMetadata:
    """Extract page metadata from *html*.

    Title and description read the generic tag first (``<title>``,
    ``<meta name="description">``) and are then overridden by
    ``og:title`` / ``og:description`` when those are present.  The
    image comes from ``og:image``.  The favicon is the first ``<link>``
    whose ``rel`` contains ``icon``, else an ``apple-touch-icon``.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = None
    if soup.title is not None:
        title = _clean(soup.title.get_text())
    og_title = _meta_content(soup, property="og:title")
    if og_title is not None:
        title = og_title

    description = _meta_content(soup, name="description")
    og_description = _meta_content(soup, property="og:description")
    if og_description is not None:
        description = og_description

    return PageMetadata(
        title=title,
        description=description,
        image=_meta_content(soup, property="og:image"),
        favicon=_favicon_ref(soup),
    )
