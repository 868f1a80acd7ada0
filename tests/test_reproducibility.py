"""Tests for utils/reproducibility.py"""

import groupby_bench
from groupby_bench.benchmarks.harness import BenchmarkConfig
from groupby_bench.models import build_cars_records
from groupby_bench.utils.reproducibility import config_hash, env_info, records_digest


class TestConfigHash:
    def test_stable_and_sensitive(self):
        assert config_hash(BenchmarkConfig()) == config_hash(BenchmarkConfig())
        assert config_hash(BenchmarkConfig()) != config_hash(BenchmarkConfig(group_key="year"))


class TestRecordsDigest:
    def test_ignores_field_order(self):
        a = [{"make": "ford", "model": "ka"}]
        b = [{"model": "ka", "make": "ford"}]
        assert records_digest(a) == records_digest(b)

    def test_record_order_matters(self):
        cars = build_cars_records()
        assert records_digest(cars) != records_digest(list(reversed(cars)))

    def test_value_change_matters(self):
        cars = build_cars_records()
        edited = build_cars_records()
        edited[2]["year"] = 2004
        assert records_digest(cars) != records_digest(edited)


class TestEnvInfo:
    def test_fields(self):
        info = env_info()
        assert info["groupby_bench"] == groupby_bench.__version__
        assert set(info) == {"groupby_bench", "python", "implementation", "numpy", "platform", "git_commit"}
