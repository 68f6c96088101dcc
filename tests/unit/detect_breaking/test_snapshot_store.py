"""Tests for detect_breaking.snapshot_store module."""

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from cluster_headlines.models import Cluster
from detect_breaking.models import HeadlineSnapshot
from detect_breaking.snapshot_store import LocalSnapshotStore
from ingest_headlines.models import NewsItem

REACTED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestLocalSnapshotStore:
    def test_missing_file_loads_none(self, tmp_path) -> None:
        assert LocalSnapshotStore(tmp_path / "none.json").load() is None

    def test_save_then_load(self, tmp_path) -> None:
        item = NewsItem(
            title="Quake hits Japan",
            url="https://bbc.example/1",
            source="bbc.example",
            published_at=REACTED_AT,
            embedding=[0.1, 0.2],
        )
        cluster = Cluster(id="world:abc", title="Quake hits Japan", items=[item], score=4.5, centroid=[0.1, 0.2])
        snapshot = HeadlineSnapshot(titles=["Quake hits Japan"], clusters=[cluster], reacted_at=REACTED_AT)
        store = LocalSnapshotStore(tmp_path / "state" / "last.json")

        path = store.save(snapshot)
        loaded = store.load()

        assert path.exists()
        assert list(path.parent.glob("*.tmp")) == []
        assert loaded == snapshot

    def test_file_is_json(self, tmp_path) -> None:
        store = LocalSnapshotStore(tmp_path / "last.json")
        store.save(HeadlineSnapshot(titles=["a"], reacted_at=REACTED_AT))

        data = json.loads((tmp_path / "last.json").read_text())

        assert data == {"titles": ["a"], "clusters": [], "reacted_at": "2024-01-01T12:00:00+00:00"}

    def test_last_write_wins(self, tmp_path) -> None:
        store = LocalSnapshotStore(tmp_path / "last.json")
        store.save(HeadlineSnapshot(titles=["old"]))
        store.save(HeadlineSnapshot(titles=["new"]))
        assert store.load().titles == ["new"]

    def test_unreadable_file_loads_none(self, tmp_path) -> None:
        path = tmp_path / "last.json"
        path.write_text('{"titles": ["a"]}{"titles"')
        assert LocalSnapshotStore(path).load() is None

    def test_concurrent_saves(self, tmp_path) -> None:
        items = [NewsItem(f"Headline {i}", f"https://x.example/{i}", "x", embedding=[0.1] * 64) for i in range(50)]
        cluster = Cluster(id="world:big", title="big", items=items)
        path = tmp_path / "last.json"

        def save_many(writer: int) -> None:
            store = LocalSnapshotStore(path)
            for _ in range(20):
                store.save(HeadlineSnapshot(titles=[f"writer {writer}"], clusters=[cluster], reacted_at=REACTED_AT))

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(save_many, range(4)))

        loaded = LocalSnapshotStore(path).load()
        assert loaded.titles in [[f"writer {w}"] for w in range(4)]
        assert len(loaded.clusters[0].items) == 50
        assert list(tmp_path.glob("*.tmp")) == []
