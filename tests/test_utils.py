"""Unit tests for utils (settings readers and chunking)."""

import logging
from pathlib import Path

import pytest

from exceptions import ConfigurationError
from utils import chunked, read_bool, read_int, read_string_list, validate_config_paths


class TestChunked:
    def test_preserves_order_and_remainder(self):
        assert list(chunked(list(range(7)), 3)) == [[0, 1, 2], [3, 4, 5], [6]]

    def test_empty_sequence(self):
        assert list(chunked([], 20)) == []

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError):
            list(chunked([1], 0))


class TestReaders:
    def test_read_bool_default_when_missing(self):
        assert read_bool({}, "flag", True) is True
        assert read_bool({"flag": ""}, "flag", False) is False

    @pytest.mark.parametrize("value", ["yes", "TRUE", "1", True])
    def test_read_bool_truthy(self, value):
        assert read_bool({"flag": value}, "flag", False) is True

    def test_read_int_rejects_bool(self):
        with pytest.raises(ConfigurationError):
            read_int({"n": True}, "n", 1)

    def test_read_int_from_string(self):
        assert read_int({"n": " 5 "}, "n", 1) == 5

    def test_read_string_list_rejects_mapping(self):
        with pytest.raises(ConfigurationError):
            read_string_list({"drives": {"C": 1}}, "drives")


class TestValidateConfigPaths:
    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="monitor_settings"):
            validate_config_paths(
                {"monitor_settings": tmp_path / "absent.yml"},
                logging.getLogger("test"),
            )

    def test_existing_path(self, tmp_path):
        path: Path = tmp_path / "monitor_settings.yml"
        path.write_text("{}")
        assert validate_config_paths({"monitor_settings": path}, logging.getLogger("t"))
