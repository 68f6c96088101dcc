"""Normalize raw headline records into NewsItems."""

from __future__ import annotations

import logging
from typing import Any, Iterable
from urllib.parse import urlparse

from common.datetime import parse_datetime
from common.utils import first_value, get_value
from ingest_headlines.models import NewsItem

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "unknown"


def source_label(url: str | None) -> str:
    """Derive a source label (host name) from a feed or article URL.

    Values that are not URLs are taken to be labels already.
    """
    if not url:
        return UNKNOWN_SOURCE
    if "://" not in str(url):
        return str(url).strip() or UNKNOWN_SOURCE
    try:
        host = urlparse(str(url)).hostname
    except ValueError:
        return UNKNOWN_SOURCE
    if not host:
        return UNKNOWN_SOURCE
    return host[4:] if host.startswith("www.") else host


def normalize_items(records: Iterable[Any]) -> list[NewsItem]:
    """Convert raw records into de-duplicated NewsItems.

    Records may be dicts or objects carrying ``title``, ``link``/``guid``/``url``,
    ``source_url``/``source`` and an optional ``date``/``published_at``.
    Entries without a title or URL are dropped. The first occurrence of a URL
    wins and input order is preserved.
    """
    seen: set[str] = set()
    items: list[NewsItem] = []
    dropped = 0

    for record in records:
        title = (get_value(record, "title") or "").strip()
        url = str(first_value(record, "link", "guid", "url") or "").strip()
        if not title or not url:
            dropped += 1
            continue
        if url in seen:
            continue
        seen.add(url)

        source = source_label(first_value(record, "source_url", "source") or url)
        published_at = parse_datetime(first_value(record, "date", "published_at"))
        items.append(NewsItem(title=title, url=url, source=source, published_at=published_at))

    logger.info("Normalized %d headlines (%d malformed dropped)", len(items), dropped)
    return items
