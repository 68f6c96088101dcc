"""End-to-end breaking-news check over one batch of raw headlines."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable

from cluster_headlines.cluster_headlines import rank_and_cluster
from common.config import NewsConfig, OutputConfig
from common.datetime import utcnow
from compute_embeddings.gateway import EmbeddingGateway
from dedupe_clusters.dedupe_clusters import dedupe_clusters
from detect_breaking.breaking import detect_breaking
from detect_breaking.headline_gate import has_significant_change, headline_change_ratio
from detect_breaking.models import BreakingCheckResult, HeadlineSnapshot
from ingest_headlines.normalize import normalize_items

logger = logging.getLogger(__name__)


def run_breaking_check(
    records: Iterable[Any],
    gateway: EmbeddingGateway,
    previous: HeadlineSnapshot | None = None,
    config: NewsConfig | None = None,
    now: datetime | None = None,
    force: bool = False,
) -> BreakingCheckResult:
    """
    Normalize, gate, cluster, de-duplicate and decide.

    Nothing is persisted here. The caller stores a new snapshot (see
    ``build_snapshot``) only after it has acted on the result.

    Args:
        records: Raw fetched headline records.
        gateway: Embedding gateway for clustering.
        previous: Snapshot of the last reacted-to event, if any.
        config: Thresholds; defaults when omitted.
        now: Reference time for recency.
        force: Skip the headline-change gate.
    """
    config = config or NewsConfig()
    now = now or utcnow()

    items = normalize_items(records)
    headlines = [item.title for item in items]
    previous_titles = previous.titles if previous is not None else None

    change_ratio = 1.0 if previous_titles is None else headline_change_ratio(headlines, previous_titles)
    proceed = has_significant_change(headlines, previous_titles, config.gate.change_threshold)
    if force and not proceed:
        logger.info("Headline gate overridden (--force)")
        proceed = True
    if not proceed:
        return BreakingCheckResult(proceed=False, change_ratio=change_ratio, headlines=headlines)

    clusters = rank_and_cluster(
        items,
        gateway,
        similarity_threshold=config.clustering.similarity_threshold,
        kind=config.clustering.kind,
        min_magnitude=config.clustering.min_magnitude,
        now=now,
        scoring=config.scoring,
        titles=config.titles,
    )
    clusters, retained = dedupe_clusters(
        clusters,
        previous.clusters if previous is not None else [],
        jaccard_threshold=config.dedupe.jaccard_threshold,
        centroid_threshold=config.dedupe.centroid_threshold,
    )
    breaking = detect_breaking(clusters, config.breaking, now=now, scoring=config.scoring)

    return BreakingCheckResult(
        proceed=True,
        change_ratio=change_ratio,
        headlines=headlines,
        clusters=clusters,
        retained=retained,
        breaking=breaking,
    )


def build_snapshot(
    result: BreakingCheckResult,
    reacted_at: datetime | None = None,
    max_clusters: int | None = None,
) -> HeadlineSnapshot:
    """Snapshot to persist once the caller has reacted to ``result``.

    Newly reacted clusters come first, followed by the retained ones from
    earlier reactions (newest first); at most ``max_clusters`` are kept.
    """
    if max_clusters is None:
        max_clusters = OutputConfig().max_retained_clusters
    breaking_ids = {decision.cluster_id for decision in result.breaking}
    reacted = [cluster for cluster in result.clusters if cluster.id in breaking_ids]
    return HeadlineSnapshot(
        titles=list(result.headlines),
        clusters=(reacted + list(result.retained))[: max(0, max_clusters)],
        reacted_at=reacted_at or utcnow(),
    )
