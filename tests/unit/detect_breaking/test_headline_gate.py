"""Tests for detect_breaking.headline_gate module."""

import pytest

from detect_breaking.headline_gate import has_significant_change, headline_change_ratio


class TestHeadlineChangeRatio:
    def test_identical(self) -> None:
        assert headline_change_ratio(["a", "b"], ["b", "a"]) == 0.0

    def test_partial(self) -> None:
        assert headline_change_ratio(["a", "b", "c", "d"], ["a", "b", "c"]) == pytest.approx(0.25)

    def test_duplicates_counted_once(self) -> None:
        assert headline_change_ratio(["a", "a", "b"], ["a"]) == pytest.approx(0.5)

    def test_empty_current(self) -> None:
        assert headline_change_ratio([], ["a"]) == 0.0


class TestHasSignificantChange:
    def test_cold_start_always_true(self) -> None:
        assert has_significant_change(["a"], None)
        assert has_significant_change([], None)

    def test_same_headlines(self) -> None:
        assert not has_significant_change(["a", "b", "c"], ["c", "b", "a"], threshold=0.3)

    def test_exceeds_threshold(self) -> None:
        assert has_significant_change(["a", "x", "y"], ["a", "b", "c"], threshold=0.3)

    def test_ratio_equal_to_threshold_is_not_a_change(self) -> None:
        assert not has_significant_change(["a", "b", "c", "x"], ["a", "b", "c"], threshold=0.25)

    def test_empty_current_with_snapshot(self) -> None:
        assert not has_significant_change([], ["a"])

    def test_exact_match_only(self) -> None:
        assert has_significant_change(["Quake hits Japan"], ["Quake Hits Japan"])
