"""Data models for cluster_headlines pipeline stage."""

from dataclasses import dataclass
from typing import Optional

from ingest_headlines.models import NewsItem


@dataclass
class Cluster:
    """Headlines believed to describe the same event."""
    id: str
    title: str
    items: list[NewsItem]
    score: float = 0.0
    centroid: Optional[list[float]] = None
    kind: str = "world"
    is_fallback: bool = False

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def sources(self) -> set[str]:
        return {item.source or "" for item in self.items}

    @property
    def urls(self) -> set[str]:
        return {item.url for item in self.items}
