"""URL extraction from the root, category and listing pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lxml import etree
from lxml import html as lxml_html

from common.errors import ExtractionError
from parse_catalog import selectors

logger = logging.getLogger(__name__)


@dataclass
class ListingExtraction:
    """URLs pulled from one listing page.

    A root listing yields further listing pages, a leaf page yields podcast
    detail URLs, never both.
    """
    is_root: bool
    listing_urls: list[str] = field(default_factory=list)
    podcast_urls: list[str] = field(default_factory=list)


def load_document(html: str):
    """Parse an HTML string into an lxml tree.

    lxml resolves character entities while parsing, so text and attribute
    values read from the tree are already decoded.
    """
    if not html or not html.strip():
        raise ExtractionError("Empty HTML document")
    try:
        return lxml_html.document_fromstring(html)
    except (etree.ParserError, ValueError) as e:
        raise ExtractionError(f"Unparsable HTML document: {e}") from e


def select_hrefs(document, xpath: str) -> list[str]:
    """Return the href of every node matching `xpath`, in document order.

    Nodes without an href (or with a blank one) are skipped.
    """
    urls = []
    for node in document.xpath(xpath):
        href = node.get("href")
        if href and href.strip():
            urls.append(href.strip())
    return urls


def parse_category_urls(html: str) -> list[str]:
    return select_hrefs(load_document(html), selectors.CATEGORY_URLS)


def parse_character_urls(html: str) -> list[str]:
    return select_hrefs(load_document(html), selectors.CHARACTER_URLS)


def page_urls(document) -> list[str]:
    """Distinct pagination URLs of a parsed listing page, first-seen order."""
    return list(dict.fromkeys(select_hrefs(document, selectors.NUMERIC_URLS)))


def podcast_urls(document) -> list[str]:
    return select_hrefs(document, selectors.PODCAST_URLS)


def has_page_indexes(document) -> bool:
    """Whether a parsed listing page contains the pagination link list."""
    return bool(document.xpath(selectors.NUMERIC_URLS))


def is_page_url(url: str) -> bool:
    """Whether the listing URL already points at one numbered page."""
    return selectors.PAGE_INDEX_MARKER in url.lower()


def extract_listing_page(url: str, html: str) -> ListingExtraction:
    """Route a listing page to pagination fan-out or detail URL extraction.

    The page-index marker in the URL wins over anything in the HTML: a
    numbered page always yields podcast URLs. Only an unnumbered URL whose
    page has pagination links is a root listing.
    """
    document = load_document(html)

    if not is_page_url(url) and has_page_indexes(document):
        listing_urls = page_urls(document)
        logger.info("Found root listing %s with %d pages", url, len(listing_urls))
        return ListingExtraction(is_root=True, listing_urls=listing_urls)

    detail_urls = podcast_urls(document)
    logger.info("Found listing page %s with %d podcasts", url, len(detail_urls))
    return ListingExtraction(is_root=False, podcast_urls=detail_urls)
