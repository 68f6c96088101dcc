"""Vector and set similarity helpers."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Cosine similarity between two vectors. Zero vectors score 0.0."""
    a = np.asarray(a, dtype="float64")
    b = np.asarray(b, dtype="float64")
    if a.size == 0 or b.size == 0 or a.shape != b.shape:
        return 0.0
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    value = float(np.dot(a, b) / (norm_a * norm_b))
    if np.isnan(value):
        return 0.0
    return value


def jaccard_similarity(set_a: Iterable, set_b: Iterable) -> float:
    """Jaccard similarity of two sets. Returns 0.0 if both empty."""
    set_a = set(set_a)
    set_b = set(set_b)
    if not set_a and not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def mean_embedding(embeddings: Iterable[Sequence[float] | None]) -> list[float] | None:
    """Average the non-empty vectors. Returns None if there are none."""
    vectors = [e for e in embeddings if e is not None and len(e) > 0]
    if not vectors:
        return None
    return np.mean(np.asarray(vectors, dtype="float64"), axis=0).tolist()
