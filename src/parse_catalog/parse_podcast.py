"""Podcast detail page extraction."""

from __future__ import annotations

import logging
from typing import Optional

from common.datetime import DATE_SENTINEL, latest_date, parse_release_date
from parse_catalog import selectors
from parse_catalog.models import Episode, PodcastRecord
from parse_catalog.parse_catalog import load_document, select_hrefs

logger = logging.getLogger(__name__)

AUTHOR_PREFIX = "by "
LANGUAGE_LABEL = "Language:"


def parse_podcast_page(html: str, url: str = "") -> PodcastRecord:
    """Build a PodcastRecord from a podcast detail page.

    Every field is looked up on its own; a missing node leaves that field at
    its default instead of failing the page.
    """
    document = load_document(html)

    episodes = parse_episodes(document)

    return PodcastRecord(
        id=url,
        url=url,
        name=node_text(document, selectors.TITLE),
        author=clean_author(node_text(document, selectors.AUTHOR)),
        thumbnail_url=node_attribute(document, selectors.THUMBNAIL, "src"),
        description=node_text(document, selectors.DESCRIPTION),
        category=node_text(document, selectors.CATEGORY),
        language=node_text(document, selectors.LANGUAGE).replace(LANGUAGE_LABEL, "").strip(),
        rating_count=parse_rating_count(node_text(document, selectors.RATINGS)),
        website_url=node_attribute(document, selectors.WEBSITE, "href"),
        author_other_works=select_hrefs(document, selectors.MORE_FROM_AUTHOR) or None,
        related_works=select_hrefs(document, selectors.RELATED_PODCASTS) or None,
        episodes=episodes,
        last_release_date=latest_date(episode.release_date for episode in episodes),
    )


def node_text(document, xpath: str) -> str:
    """Text content of the first node matching `xpath`, or an empty string."""
    nodes = document.xpath(xpath)
    if not nodes:
        return ""
    return nodes[0].text_content().strip()


def node_attribute(document, xpath: str, attribute: str) -> Optional[str]:
    nodes = document.xpath(xpath)
    if not nodes:
        return None
    value = nodes[0].get(attribute)
    return value.strip() if value else None


def clean_author(text: str) -> str:
    """Strip the leading "By " from the author line."""
    if text.lower().startswith(AUTHOR_PREFIX):
        text = text[text.index(" "):]
    return text.strip()


def parse_rating_count(text: str) -> int:
    """Read the leading number of a text like "1,234 Ratings"; 0 if absent."""
    if not text:
        return 0
    token = text.split()[0].replace(",", "")
    try:
        return int(token)
    except ValueError:
        logger.warning("Unreadable rating count: %r", text)
        return 0


def parse_episodes(document) -> list[Episode]:
    """Parse the episode table rows in page order.

    Rows without a readable index are skipped. A missing or unparsable
    release date becomes DATE_SENTINEL.
    """
    episodes = []
    for row in document.xpath(selectors.EPISODES):
        cells = [child for child in row if child.tag == "td"]
        if len(cells) < 3:
            logger.warning("Skipping episode row with %d cells", len(cells))
            continue

        try:
            index = int(cells[0].get("sort-value", "").strip())
        except ValueError:
            logger.warning("Skipping episode row without an index")
            continue

        date_value = cells[3].get("sort-value") if len(cells) > 3 else None
        release_date = parse_release_date(date_value) if date_value else DATE_SENTINEL

        episodes.append(
            Episode(
                index=index,
                name=(cells[1].get("sort-value") or "").strip(),
                description=(cells[2].get("sort-value") or "").strip(),
                release_date=release_date,
            )
        )
    return episodes
