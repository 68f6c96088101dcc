"""Data models for detect_breaking pipeline stage."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from cluster_headlines.models import Cluster


@dataclass
class BreakingDecision:
    """A cluster that met the breaking-news bar."""
    cluster_id: str
    rationale: str
    sources: list[str]
    kind: str = "world"


@dataclass
class HeadlineSnapshot:
    """Headlines (and clusters) attached to the last reacted-to event."""
    titles: list[str]
    clusters: list[Cluster] = field(default_factory=list)
    reacted_at: Optional[datetime] = None


@dataclass
class BreakingCheckResult:
    """Outcome of one pipeline run."""
    proceed: bool
    change_ratio: float
    headlines: list[str]
    clusters: list[Cluster] = field(default_factory=list)
    retained: list[Cluster] = field(default_factory=list)
    breaking: list[BreakingDecision] = field(default_factory=list)

    @property
    def has_breaking(self) -> bool:
        return bool(self.breaking)
