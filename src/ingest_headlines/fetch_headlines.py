"""RSS feed fetching."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any

import feedparser
import requests

from ingest_headlines.sources import MOCK_HEADLINES

logger = logging.getLogger(__name__)

USER_AGENT = "news-breaking/1.0 (RSS reader)"


def fetch_headlines(
    feed_urls: list[str],
    timeout: int = 30,
    max_workers: int = 8,
) -> list[dict[str, Any]]:
    """Fetch raw headline records from every feed.

    Feeds are fetched concurrently; results are concatenated in feed order.
    A failing feed contributes nothing and does not stop the others.
    """
    if not feed_urls:
        logger.warning("No feed sources configured")
        return []

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(feed_urls)))) as pool:
        batches = list(pool.map(lambda url: _fetch_feed(url, timeout), feed_urls))

    records = [record for batch in batches for record in batch]
    logger.info("Fetched %d raw headlines from %d feeds", len(records), len(feed_urls))
    return records


def _fetch_feed(feed_url: str, timeout: int) -> list[dict[str, Any]]:
    """Fetch and parse a single RSS feed."""
    try:
        response = requests.get(
            feed_url,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Failed feed %s: %s", feed_url, e)
        return []

    feed = feedparser.parse(response.content)
    if feed.get("bozo") and not feed.entries:
        logger.warning("Failed feed %s: %s", feed_url, feed.get("bozo_exception"))
        return []

    return [_parse_entry(entry, feed_url) for entry in feed.entries]


def _parse_entry(entry, feed_url: str) -> dict[str, Any]:
    """Flatten a feed entry into a raw headline record."""
    return {
        "title": (entry.get("title") or "").strip(),
        "link": entry.get("link") or "",
        "guid": entry.get("id") or entry.get("guid") or "",
        "source_url": feed_url,
        "date": entry.get("published") or entry.get("updated"),
    }


def mock_headlines() -> list[dict[str, Any]]:
    """Sample headline records stamped with the current time."""
    now = datetime.now(timezone.utc).isoformat()
    return [{**record, "date": now} for record in MOCK_HEADLINES]
