"""Cluster scoring."""

from __future__ import annotations

import logging
from datetime import datetime

from cluster_headlines.models import Cluster
from common.config import ScoringConfig
from common.datetime import utcnow

logger = logging.getLogger(__name__)

SIZE_WEIGHT = 2.0
SOURCE_WEIGHT = 1.5


def recency_score(
    published_at: datetime | None,
    now: datetime,
    window_hours: float = 48.0,
    floor: float = 0.2,
    ceiling: float = 1.0,
    unknown: float = 0.5,
) -> float:
    """Map an item's age to a bounded score; newer is higher.

    Fresh items score ``ceiling``, decaying linearly to ``floor`` across
    ``window_hours``. Items from the future count as fresh and items without
    a timestamp get ``unknown``.
    """
    if published_at is None:
        return unknown
    hours = max(0.0, (now - published_at).total_seconds() / 3600)
    if window_hours <= 0:
        return floor
    return max(floor, min(ceiling, 1.0 - hours / window_hours))


def item_recencies(cluster: Cluster, now: datetime, scoring: ScoringConfig | None = None) -> list[float]:
    scoring = scoring or ScoringConfig()
    return [
        recency_score(
            item.published_at,
            now,
            window_hours=scoring.recency_window_hours,
            floor=scoring.recency_floor,
            ceiling=scoring.recency_ceiling,
            unknown=scoring.unknown_recency,
        )
        for item in cluster.items
    ]


def score_cluster(cluster: Cluster, now: datetime, scoring: ScoringConfig | None = None) -> float:
    """2 x members + 1.5 x distinct sources + average recency."""
    recencies = item_recencies(cluster, now, scoring)
    average = sum(recencies) / len(recencies) if recencies else 0.0
    return SIZE_WEIGHT * cluster.size + SOURCE_WEIGHT * len(cluster.sources) + average


def score_clusters(
    clusters: list[Cluster],
    now: datetime | None = None,
    scoring: ScoringConfig | None = None,
) -> list[Cluster]:
    """Score every cluster in place and return them by descending score.

    The catch-all fallback cluster is ranked by its member count only.
    """
    now = now or utcnow()
    for cluster in clusters:
        if cluster.is_fallback:
            cluster.score = float(cluster.size)
        else:
            cluster.score = score_cluster(cluster, now, scoring)
        logger.debug("Scored cluster %s (%d items) -> %.2f", cluster.id, cluster.size, cluster.score)
    return sorted(clusters, key=lambda c: c.score, reverse=True)
