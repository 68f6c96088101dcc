"""Data models for ingest_headlines pipeline stage."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class NewsItem:
    """One headline observation, keyed by URL.

    Immutable for the duration of a pipeline run; the clustering stage
    attaches embeddings by building a copy.
    """
    title: str
    url: str
    source: str
    published_at: Optional[datetime] = None
    embedding: Optional[list[float]] = None
