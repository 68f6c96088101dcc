"""Decide which clusters count as breaking news."""

from __future__ import annotations

import logging
from datetime import datetime

from cluster_headlines.models import Cluster
from cluster_headlines.scoring import item_recencies
from common.config import BreakingRules, ScoringConfig
from common.datetime import utcnow
from detect_breaking.models import BreakingDecision

logger = logging.getLogger(__name__)

MAX_DECISION_SOURCES = 5


def detect_breaking(
    clusters: list[Cluster],
    rules: BreakingRules | None = None,
    now: datetime | None = None,
    scoring: ScoringConfig | None = None,
) -> list[BreakingDecision]:
    """
    Flag clusters that meet the coverage or recency bar.

    A cluster qualifies with at least ``min_items`` members from at least
    ``min_sources`` distinct sources, or with two or more members whose
    freshest item scores at least ``recency_boost``. Output keeps input order.
    """
    rules = rules or BreakingRules()
    now = now or utcnow()

    decisions = []
    for cluster in clusters:
        recencies = item_recencies(cluster, now, scoring)
        if not recencies:
            continue

        size = cluster.size
        source_count = len(cluster.sources)
        recent_boost = max(recencies)

        covered = size >= rules.min_items and source_count >= rules.min_sources
        fresh = recent_boost >= rules.recency_boost and size >= 2
        if not (covered or fresh):
            continue

        decisions.append(
            BreakingDecision(
                cluster_id=cluster.id,
                rationale=f"size={size}, sources={source_count}, recentBoost={recent_boost:.2f}",
                sources=[item.url for item in cluster.items[:MAX_DECISION_SOURCES]],
                kind=cluster.kind,
            )
        )

    logger.info("Detected %d breaking clusters out of %d", len(decisions), len(clusters))
    return decisions
