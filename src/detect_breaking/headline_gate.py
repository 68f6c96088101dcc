"""Cheap check for whether headlines moved enough to re-run clustering."""

from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


def headline_change_ratio(current: Iterable[str], previous: Iterable[str]) -> float:
    """Share of current titles not present (exact match) in the previous set."""
    titles = list(dict.fromkeys(current))
    if not titles:
        return 0.0
    previous_set = set(previous)
    overlap = sum(1 for title in titles if title in previous_set)
    return 1.0 - overlap / len(titles)


def has_significant_change(
    current: Iterable[str],
    previous: Iterable[str] | None,
    threshold: float = 0.3,
) -> bool:
    """
    Decide whether the headline set changed enough since the last reaction.

    With no previous snapshot this is always True. Otherwise the change ratio
    must exceed ``threshold``. An empty current set never counts as a change
    once a snapshot exists.
    """
    if previous is None:
        logger.info("No previous headline snapshot; treating as significant change")
        return True

    ratio = headline_change_ratio(current, previous)
    changed = ratio > threshold
    logger.info("Headline change ratio %.2f (threshold %.2f) -> %s", ratio, threshold, "proceed" if changed else "skip")
    return changed
