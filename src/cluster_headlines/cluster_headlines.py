"""Group headlines into event clusters with greedy nearest-centroid assignment."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

import numpy as np

from cluster_headlines.models import Cluster
from cluster_headlines.scoring import score_clusters
from cluster_headlines.titles import magnitude_of, resolve_titles
from common.config import ScoringConfig, TitleConfig
from common.hashing import generate_cluster_id
from common.similarity import cosine_similarity
from compute_embeddings.gateway import EmbeddingGateway
from ingest_headlines.models import NewsItem

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "uncategorized"


class _ClusterBuilder:
    """Cluster under construction; the centroid is kept as a running mean."""

    def __init__(self, item: NewsItem, vector: np.ndarray):
        self.items = [item]
        self.centroid = vector.astype("float64", copy=True)

    def add(self, item: NewsItem, vector: np.ndarray) -> None:
        self.items.append(item)
        self.centroid += (vector - self.centroid) / len(self.items)

    def build(self, kind: str) -> Cluster:
        return Cluster(
            id=generate_cluster_id(kind, self.items[0].url),
            title=self.items[0].title,
            items=self.items,
            centroid=self.centroid.tolist(),
            kind=kind,
        )


def filter_minor_items(items: list[NewsItem], min_magnitude: float | None) -> list[NewsItem]:
    """Drop magnitude reports below ``min_magnitude``; other items pass through."""
    if min_magnitude is None:
        return list(items)
    kept = []
    for item in items:
        magnitude = magnitude_of(item.title)
        if magnitude is not None and magnitude < min_magnitude:
            logger.debug("Skipping minor event (M%.1f): %s", magnitude, item.title)
            continue
        kept.append(item)
    if len(kept) != len(items):
        logger.info("Filtered %d minor magnitude reports", len(items) - len(kept))
    return kept


def fallback_cluster(items: list[NewsItem], kind: str = "world") -> Cluster:
    """Single catch-all cluster used when no embeddings are available."""
    return Cluster(
        id=f"{kind}:{FALLBACK_TITLE}",
        title=FALLBACK_TITLE,
        items=list(items),
        score=float(len(items)),
        kind=kind,
        is_fallback=True,
    )


def cluster_headlines(
    items: list[NewsItem],
    gateway: EmbeddingGateway,
    similarity_threshold: float = 0.8,
    kind: str = "world",
    min_magnitude: float | None = None,
) -> list[Cluster]:
    """
    Assign every headline to exactly one cluster.

    Items are visited in input order. Each joins the existing cluster whose
    centroid is most similar to its embedding when that similarity reaches
    ``similarity_threshold`` (ties go to the earliest cluster), otherwise it
    seeds a new cluster. Earlier assignments are never revisited.

    Args:
        items: Normalized headlines.
        gateway: Embedding gateway used for title embeddings.
        similarity_threshold: Minimum cosine similarity to join a cluster.
        kind: Label namespacing cluster IDs.
        min_magnitude: Magnitude reports below this are excluded entirely.

    Returns:
        Clusters in creation order, or a single fallback cluster when
        embeddings are unavailable. Empty input yields an empty list.
    """
    items = filter_minor_items(items, min_magnitude)
    if not items:
        logger.info("No headlines to cluster")
        return []

    vectors = gateway.embed([item.title for item in items])
    if vectors is None or len(vectors) != len(items):
        logger.warning("Embeddings unavailable; using a single fallback cluster for %d headlines", len(items))
        return [fallback_cluster(items, kind)]

    builders: list[_ClusterBuilder] = []
    for item, embedding in zip(items, vectors, strict=True):
        item = replace(item, embedding=embedding)
        vector = np.asarray(embedding, dtype="float64")

        best_index = None
        best_similarity = float("-inf")
        for index, builder in enumerate(builders):
            similarity = cosine_similarity(vector, builder.centroid)
            if similarity > best_similarity:
                best_index, best_similarity = index, similarity

        if best_index is not None and best_similarity >= similarity_threshold:
            builders[best_index].add(item, vector)
            logger.debug("Assigned '%s' to cluster %d (sim=%.3f)", item.title, best_index, best_similarity)
        else:
            builders.append(_ClusterBuilder(item, vector))

    clusters = [builder.build(kind) for builder in builders]
    logger.info("Built %d clusters from %d headlines", len(clusters), len(items))
    return clusters


def rank_and_cluster(
    items: list[NewsItem],
    gateway: EmbeddingGateway,
    similarity_threshold: float = 0.8,
    kind: str = "world",
    min_magnitude: float | None = None,
    now: datetime | None = None,
    scoring: ScoringConfig | None = None,
    titles: TitleConfig | None = None,
) -> list[Cluster]:
    """Cluster headlines, resolve their labels and rank them by score."""
    titles = titles or TitleConfig()
    clusters = cluster_headlines(
        items,
        gateway,
        similarity_threshold=similarity_threshold,
        kind=kind,
        min_magnitude=min_magnitude,
    )
    resolve_titles(clusters, max_words=titles.max_words, min_phrase_words=titles.min_phrase_words)
    return score_clusters(clusters, now=now, scoring=scoring)
