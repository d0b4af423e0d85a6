"""Unit tests for the command-line scripts."""

import importlib.util
import os
import pytest
from datetime import date
from unittest.mock import MagicMock, patch

SCRIPTS_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "scripts")


def load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, os.path.join(SCRIPTS_DIR, f"{name}.py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class FrozenDate(date):
    @classmethod
    def today(cls):
        return cls(2024, 1, 10)


class TestWarmBenchmarkCache:
    """Tests for warm_benchmark_cache argument handling."""

    @pytest.fixture
    def script(self):
        return load_script("warm_benchmark_cache")

    @pytest.fixture
    def cache(self, script):
        cache = MagicMock()
        cache.ensure.return_value = 0
        cache.read.return_value = []
        with patch.object(script, "init_db"), \
                patch.object(script, "get_session"), \
                patch.object(script, "BenchmarkSeriesCache", return_value=cache):
            yield cache

    def test_end_defaults_to_today_at_run_time(self, script, cache) -> None:
        with patch.object(script, "date", FrozenDate), \
                patch("sys.argv", ["warm", "--symbols", "^GSPC", "--years", "1"]):
            assert script.main() == 0

        cache.ensure.assert_called_once_with("^GSPC", date(2023, 1, 10), date(2024, 1, 10))

    def test_explicit_range(self, script, cache) -> None:
        argv = ["warm", "--symbols", "XLK", "--start", "2020-01-01", "--end", "2020-06-30"]
        with patch("sys.argv", argv):
            script.main()

        cache.ensure.assert_called_once_with("XLK", date(2020, 1, 1), date(2020, 6, 30))
