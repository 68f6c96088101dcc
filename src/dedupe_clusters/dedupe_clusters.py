"""Remove overlapping clusters across two cluster sets."""

from __future__ import annotations

import logging

from cluster_headlines.models import Cluster
from common.similarity import cosine_similarity, jaccard_similarity, mean_embedding

logger = logging.getLogger(__name__)


def _centroid(cluster: Cluster) -> list[float] | None:
    """Mean of whatever member embeddings are present."""
    return mean_embedding(item.embedding for item in cluster.items)


def centroid_similarity(a: Cluster, b: Cluster) -> float:
    centroid_a = _centroid(a)
    centroid_b = _centroid(b)
    if centroid_a is None or centroid_b is None:
        return 0.0
    return cosine_similarity(centroid_a, centroid_b)


def clusters_overlap(
    a: Cluster,
    b: Cluster,
    jaccard_threshold: float = 0.3,
    centroid_threshold: float = 0.85,
) -> bool:
    """True when the clusters share enough member URLs or sit close in embedding space."""
    jaccard = jaccard_similarity(a.urls, b.urls)
    if jaccard >= jaccard_threshold:
        logger.debug("Clusters %s and %s overlap (jaccard=%.2f)", a.id, b.id, jaccard)
        return True
    similarity = centroid_similarity(a, b)
    if similarity >= centroid_threshold:
        logger.debug("Clusters %s and %s overlap (centroid=%.3f)", a.id, b.id, similarity)
        return True
    return False


def dedupe_clusters(
    primary: list[Cluster],
    secondary: list[Cluster] | None = None,
    jaccard_threshold: float = 0.3,
    centroid_threshold: float = 0.85,
) -> tuple[list[Cluster], list[Cluster]]:
    """
    De-duplicate a primary cluster set and prune a secondary set against it.

    Within ``primary``, of any overlapping pair only the higher-scored cluster
    survives (members are not merged; equal scores keep the earlier one). Any
    ``secondary`` cluster overlapping a surviving primary cluster is dropped.

    Args:
        primary: Newly detected clusters.
        secondary: Previously retained clusters.
        jaccard_threshold: Minimum member-URL Jaccard similarity for overlap.
        centroid_threshold: Minimum centroid cosine similarity for overlap.

    Returns:
        (kept_primary, kept_secondary), each in its input order.
    """
    secondary = secondary or []

    by_score = sorted(enumerate(primary), key=lambda pair: (-pair[1].score, pair[0]))
    kept: list[tuple[int, Cluster]] = []
    for index, cluster in by_score:
        duplicate_of = next(
            (
                other for _, other in kept
                if clusters_overlap(cluster, other, jaccard_threshold, centroid_threshold)
            ),
            None,
        )
        if duplicate_of is not None:
            logger.info(
                "Dropping cluster '%s' (score=%.2f) in favour of '%s' (score=%.2f)",
                cluster.title, cluster.score, duplicate_of.title, duplicate_of.score,
            )
            continue
        kept.append((index, cluster))

    kept_primary = [cluster for _, cluster in sorted(kept, key=lambda pair: pair[0])]

    kept_secondary = []
    for cluster in secondary:
        if any(
            clusters_overlap(cluster, other, jaccard_threshold, centroid_threshold)
            for other in kept_primary
        ):
            logger.info("Dropping retained cluster '%s' covered by a new cluster", cluster.title)
            continue
        kept_secondary.append(cluster)

    logger.info(
        "De-duplicated clusters: primary %d -> %d, secondary %d -> %d",
        len(primary), len(kept_primary), len(secondary), len(kept_secondary),
    )
    return kept_primary, kept_secondary
