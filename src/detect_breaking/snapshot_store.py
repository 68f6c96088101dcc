"""Local JSON store for the last reacted-to headline snapshot."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from cluster_headlines.models import Cluster
from common.datetime import parse_datetime
from common.serialization import serialize_dataclass
from detect_breaking.models import HeadlineSnapshot
from ingest_headlines.models import NewsItem

logger = logging.getLogger(__name__)


def _item_from_dict(data: dict[str, Any]) -> NewsItem:
    return NewsItem(
        title=data["title"],
        url=data["url"],
        source=data.get("source") or "",
        published_at=parse_datetime(data.get("published_at")),
        embedding=data.get("embedding"),
    )


def _cluster_from_dict(data: dict[str, Any]) -> Cluster:
    return Cluster(
        id=data["id"],
        title=data["title"],
        items=[_item_from_dict(item) for item in data.get("items", [])],
        score=float(data.get("score", 0.0)),
        centroid=data.get("centroid"),
        kind=data.get("kind", "world"),
        is_fallback=bool(data.get("is_fallback", False)),
    )


def snapshot_from_dict(data: dict[str, Any]) -> HeadlineSnapshot:
    return HeadlineSnapshot(
        titles=list(data.get("titles", [])),
        clusters=[_cluster_from_dict(c) for c in data.get("clusters", [])],
        reacted_at=parse_datetime(data.get("reacted_at")),
    )


class LocalSnapshotStore:
    """Reads and writes a HeadlineSnapshot as a JSON file.

    Concurrent writers are not coordinated; the last write wins.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> HeadlineSnapshot | None:
        if not self.path.exists():
            logger.info("No headline snapshot at %s", self.path)
            return None
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable headline snapshot at %s: %s", self.path, e)
            return None
        snapshot = snapshot_from_dict(data)
        logger.info("Loaded headline snapshot with %d titles from %s", len(snapshot.titles), self.path)
        return snapshot

    def save(self, snapshot: HeadlineSnapshot) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Each writer gets its own temp file; the final rename is atomic.
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            json.dump(serialize_dataclass(snapshot), f, default=str, ensure_ascii=False)
        os.replace(f.name, self.path)
        logger.info("Saved headline snapshot with %d titles to %s", len(snapshot.titles), self.path)
        return self.path
