"""Tests for common.utils module."""

from common.utils import first_value, get_value


class TestGetValue:
    def test_dict_access(self) -> None:
        assert get_value({"name": "test"}, "name") == "test"

    def test_object_attribute_access(self) -> None:
        class Obj:
            name = "test"

        assert get_value(Obj(), "name") == "test"

    def test_dict_missing_key_returns_none(self) -> None:
        assert get_value({}, "missing") is None

    def test_object_missing_attr_returns_none(self) -> None:
        class Obj:
            pass

        assert get_value(Obj(), "missing") is None


class TestFirstValue:
    def test_returns_first_truthy(self) -> None:
        record = {"link": "", "guid": "urn:1", "url": "https://x"}
        assert first_value(record, "link", "guid", "url") == "urn:1"

    def test_none_when_all_missing(self) -> None:
        assert first_value({}, "link", "guid") is None
