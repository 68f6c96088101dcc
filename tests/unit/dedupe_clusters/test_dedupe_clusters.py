"""Tests for dedupe_clusters.dedupe_clusters module."""

from cluster_headlines.models import Cluster
from dedupe_clusters.dedupe_clusters import centroid_similarity, clusters_overlap, dedupe_clusters
from ingest_headlines.models import NewsItem


def _cluster(cid: str, urls: list[str], score: float = 0.0, embedding=None) -> Cluster:
    items = [NewsItem(title=url, url=url, source="x", embedding=embedding) for url in urls]
    return Cluster(id=cid, title=cid, items=items, score=score)


class TestClustersOverlap:
    def test_url_jaccard(self) -> None:
        a = _cluster("a", ["u1", "u2", "u3"])
        b = _cluster("b", ["u2", "u3", "u4"])
        # jaccard = 2 / 4
        assert clusters_overlap(a, b)

    def test_below_jaccard_threshold(self) -> None:
        a = _cluster("a", ["u1", "u2", "u3", "u4"])
        b = _cluster("b", ["u4", "u5", "u6", "u7"])
        assert not clusters_overlap(a, b)

    def test_centroid_similarity(self) -> None:
        a = _cluster("a", ["u1"], embedding=[1.0, 0.0])
        b = _cluster("b", ["u2"], embedding=[0.95, 0.1])
        assert clusters_overlap(a, b)

    def test_missing_embeddings_only_use_urls(self) -> None:
        a = _cluster("a", ["u1"], embedding=[1.0, 0.0])
        b = _cluster("b", ["u2"])
        assert centroid_similarity(a, b) == 0.0
        assert not clusters_overlap(a, b)


class TestDedupeClusters:
    def test_keeps_higher_scored_of_overlapping_pair(self) -> None:
        low = _cluster("low", ["u1", "u2", "u3"], score=7)
        high = _cluster("high", ["u2", "u3", "u4"], score=10)

        kept, secondary = dedupe_clusters([low, high])

        assert [c.id for c in kept] == ["high"]
        assert kept[0].urls == {"u2", "u3", "u4"}
        assert secondary == []

    def test_equal_scores_keep_earlier(self) -> None:
        first = _cluster("first", ["u1", "u2"], score=5)
        second = _cluster("second", ["u1", "u2"], score=5)
        assert [c.id for c in dedupe_clusters([first, second])[0]] == ["first"]

    def test_preserves_input_order(self) -> None:
        a = _cluster("a", ["a1"], score=1)
        b = _cluster("b", ["b1"], score=9)
        c = _cluster("c", ["c1"], score=5)
        assert [x.id for x in dedupe_clusters([a, b, c])[0]] == ["a", "b", "c"]

    def test_prunes_secondary(self) -> None:
        current = _cluster("current", ["u1", "u2"], score=4)
        stale = _cluster("stale", ["u1", "u2", "u3"], score=99)
        unrelated = _cluster("unrelated", ["z1"], score=1)

        kept, retained = dedupe_clusters([current], [stale, unrelated])

        assert [c.id for c in kept] == ["current"]
        assert [c.id for c in retained] == ["unrelated"]

    def test_second_pass_is_a_fixed_point(self) -> None:
        clusters = [
            _cluster("a", ["u1", "u2"], score=3, embedding=[1.0, 0.0]),
            _cluster("b", ["u2", "u3"], score=5, embedding=[0.0, 1.0]),
            _cluster("c", ["u9"], score=2, embedding=[0.99, 0.1]),
            _cluster("d", ["u7"], score=1, embedding=[-1.0, 0.0]),
        ]

        once, _ = dedupe_clusters(clusters)
        twice, _ = dedupe_clusters(once)

        assert [c.id for c in once] == ["b", "c", "d"]
        assert [c.id for c in twice] == [c.id for c in once]

    def test_empty(self) -> None:
        assert dedupe_clusters([], None) == ([], [])
