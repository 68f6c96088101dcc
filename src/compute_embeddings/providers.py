"""Embedding providers wrapped by the gateway."""

from __future__ import annotations

import logging
import os
from typing import Protocol

from openai import OpenAI
from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "text-embedding-3-small"
DEFAULT_LOCAL_MODEL = "all-MiniLM-L6-v2"


class EmbeddingProvider(Protocol):
    def embed(self, texts: list[str]) -> list[list[float]]:
        ...


class EmbeddingsDisabledError(RuntimeError):
    """Raised by the null provider so callers take the fallback path."""


class OpenAIEmbeddingProvider:
    """Embeds text with the OpenAI embeddings endpoint in a single batched call."""

    def __init__(self, model: str = DEFAULT_OPENAI_MODEL, client: OpenAI | None = None):
        self.model = model
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=os.environ.get("OPENAI_API_KEY"))
        return self._client

    def embed(self, texts: list[str]) -> list[list[float]]:
        logger.info("Requesting %d embeddings from OpenAI (model=%s)", len(texts), self.model)
        response = self.client.embeddings.create(model=self.model, input=texts)
        ordered = sorted(response.data, key=lambda item: item.index)
        return [list(item.embedding) for item in ordered]


class SentenceTransformerProvider:
    """Embeds text with a local sentence-transformers model, loaded on first use."""

    def __init__(self, model: str = DEFAULT_LOCAL_MODEL, batch_size: int = 32):
        self.model = model
        self.batch_size = batch_size
        self._encoder: SentenceTransformer | None = None

    def embed(self, texts: list[str]) -> list[list[float]]:
        if self._encoder is None:
            logger.info("Loading model: %s", self.model)
            self._encoder = SentenceTransformer(self.model)
        vectors = self._encoder.encode(
            texts,
            batch_size=self.batch_size,
            show_progress_bar=False,
            convert_to_numpy=True,
        )
        return [vector.tolist() for vector in vectors]


class NullEmbeddingProvider:
    """Provider that never has embeddings."""

    def embed(self, texts: list[str]) -> list[list[float]]:
        raise EmbeddingsDisabledError("embedding provider disabled")


def build_provider(name: str, model: str | None = None) -> EmbeddingProvider:
    """Build an embedding provider by name.

    Raises:
        ValueError: If the provider name is not known.
    """
    key = (name or "").strip().lower()
    if key == "openai":
        return OpenAIEmbeddingProvider(model=model or DEFAULT_OPENAI_MODEL)
    if key in ("sentence-transformers", "sentence_transformers", "local"):
        return SentenceTransformerProvider(model=model or DEFAULT_LOCAL_MODEL)
    if key == "none":
        return NullEmbeddingProvider()
    raise ValueError(f"Unknown embedding provider: {name}")
