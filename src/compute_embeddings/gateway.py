"""Embedding gateway.

Wraps an embedding provider so that callers get either one vector per input
text, in input order, or ``None`` meaning "no embeddings this run". Provider
failures of any kind, content-policy rejections included, are reported as
``None`` and logged; they never propagate.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Sequence

import openai

from compute_embeddings.providers import EmbeddingProvider

logger = logging.getLogger(__name__)


def _is_policy_rejection(exc: openai.BadRequestError) -> bool:
    code = getattr(exc, "code", None) or ""
    return "policy" in str(code) or "policy" in str(exc).lower()


def _valid_vectors(vectors: Any, expected: int) -> bool:
    if not isinstance(vectors, (list, tuple)) or len(vectors) != expected:
        return False
    dims = set()
    for vector in vectors:
        if not isinstance(vector, (list, tuple)) or not vector:
            return False
        if not all(isinstance(v, Real) for v in vector):
            return False
        dims.add(len(vector))
    return len(dims) == 1


class EmbeddingGateway:
    """Batches texts to a provider and normalizes every failure to ``None``."""

    def __init__(self, provider: EmbeddingProvider):
        self.provider = provider

    def embed(self, texts: Sequence[str]) -> list[list[float]] | None:
        """Return one vector per text, or None when embeddings are unavailable."""
        texts = list(texts)
        if not texts:
            return []

        try:
            vectors = self.provider.embed(texts)
        except openai.BadRequestError as e:
            if _is_policy_rejection(e):
                logger.warning("Embedding request rejected by provider policy: %s", e)
            else:
                logger.warning("Embedding request rejected by provider: %s", e)
            return None
        except Exception as e:
            logger.warning("Embeddings unavailable (%s): %s", type(e).__name__, e)
            return None

        if not _valid_vectors(vectors, len(texts)):
            got = len(vectors) if isinstance(vectors, (list, tuple)) else type(vectors).__name__
            logger.warning("Embeddings unavailable: expected %d vectors, got %s", len(texts), got)
            return None

        return [[float(v) for v in vector] for vector in vectors]
