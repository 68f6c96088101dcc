"""Tests for common.similarity module."""

import numpy as np
import pytest

from common.similarity import cosine_similarity, jaccard_similarity, mean_embedding


class TestCosineSimilarity:
    def test_identical_vectors(self) -> None:
        assert cosine_similarity([1.0, 2.0], [1.0, 2.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_accepts_numpy_arrays(self) -> None:
        assert cosine_similarity(np.array([1.0, 1.0]), [2.0, 2.0]) == pytest.approx(1.0)

    def test_zero_vector_scores_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0

    def test_empty_vector_scores_zero(self) -> None:
        assert cosine_similarity([], []) == 0.0

    def test_dimension_mismatch_scores_zero(self) -> None:
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0


class TestJaccardSimilarity:
    def test_partial_overlap(self) -> None:
        assert jaccard_similarity({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)

    def test_both_empty(self) -> None:
        assert jaccard_similarity(set(), set()) == 0.0

    def test_identical(self) -> None:
        assert jaccard_similarity(["a"], ["a"]) == 1.0


class TestMeanEmbedding:
    def test_averages_vectors(self) -> None:
        assert mean_embedding([[1.0, 0.0], [0.0, 1.0]]) == [0.5, 0.5]

    def test_skips_missing(self) -> None:
        assert mean_embedding([None, [2.0, 4.0], []]) == [2.0, 4.0]

    def test_none_when_nothing_available(self) -> None:
        assert mean_embedding([None, None]) is None
