"""Tests for benchmarks/cli.py and benchmarks/experiments.py"""

import json

import pytest

from groupby_bench.benchmarks import cli, experiments

FAST_ARGS = ["--min-time", "0", "--max-time", "0", "--min-samples", "2", "--delay", "0", "--no-memory"]


class TestBenchmarkCli:
    def test_cars_run(self, tmp_path, capsys):
        output = tmp_path / "cars.jsonl"
        cli.main(["--dataset", "cars", "--output", str(output), *FAST_ARGS])
        out = capsys.readouterr().out
        assert "group_by x " in out
        assert "ops/sec" in out
        assert "Fastest is " in out
        lines = output.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["metrics"]["group_count"] == 2

    def test_synthetic_with_missing_keys(self, tmp_path, capsys):
        output = tmp_path / "synthetic.jsonl"
        cli.main(
            [
                "--dataset", "synthetic",
                "--sizes", "20,40",
                "--key-counts", "3",
                "--missing-rates", "0.5",
                "--seeds", "0",
                "--output", str(output),
                *FAST_ARGS,
            ]
        )
        records = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
        assert len(records) == 4
        strict = [r for r in records if r["result"]["method"] == "group_by_strict"]
        assert all(r["result"]["error"] for r in strict)
        assert "Fastest is group_by" in capsys.readouterr().out

    def test_file_dataset(self, tmp_path):
        data = tmp_path / "records.json"
        data.write_text(json.dumps([{"kind": "a"}, {"kind": "b"}, {"kind": "a"}]), encoding="utf-8")
        output = tmp_path / "file.jsonl"
        cli.main(
            [
                "--dataset", "file",
                "--records-path", str(data),
                "--group-key", "kind",
                "--methods", "group_by",
                "--output", str(output),
                *FAST_ARGS,
            ]
        )
        record = json.loads(output.read_text(encoding="utf-8"))
        assert record["instance"]["meta"]["path"] == str(data)
        assert len(record["instance"]["meta"]["sha256"]) == 64
        assert record["instance"]["n_keys"] == 2
        assert record["metrics"]["largest_group"] == 2

    def test_file_with_list_values_rejected(self, tmp_path):
        data = tmp_path / "records.json"
        data.write_text(json.dumps([{"make": ["a"]}]), encoding="utf-8")
        with pytest.raises(SystemExit, match="field 'make' is not a scalar"):
            cli.main(["--dataset", "file", "--records-path", str(data), *FAST_ARGS])

    @pytest.mark.parametrize("group_key, n_keys", [("make", 2), ("year", 3), ("color", 1)])
    def test_cars_key_count_follows_group_key(self, capsys, group_key, n_keys):
        cli.main(["--dataset", "cars", "--group-key", group_key, "--dry-run"])
        assert f"cars n=3 keys={n_keys} " in capsys.readouterr().out

    @pytest.mark.parametrize(
        "flags, message",
        [
            (["--min-samples", "0"], "min_samples must be at least 1"),
            (["--max-time", "-1"], "max_time must be non-negative"),
            (["--min-time", "-0.5"], "min_time must be non-negative"),
            (["--delay", "-1"], "delay must be non-negative"),
        ],
    )
    def test_invalid_sampling_settings(self, tmp_path, flags, message):
        output = tmp_path / "never.jsonl"
        with pytest.raises(SystemExit, match=f"Invalid argument: {message}"):
            cli.main(["--dataset", "cars", "--output", str(output), *flags])
        assert not output.exists()

    def test_dry_run(self, tmp_path, capsys):
        output = tmp_path / "never.jsonl"
        cli.main(["--dataset", "synthetic", "--sizes", "10,20", "--dry-run", "--output", str(output)])
        out = capsys.readouterr().out
        assert "synthetic n=10" in out
        assert "synthetic n=20" in out
        assert not output.exists()

    def test_unknown_method(self):
        with pytest.raises(SystemExit, match="Unknown methods"):
            cli.main(["--methods", "reduce_spread", "--dry-run"])

    def test_file_dataset_requires_path(self):
        with pytest.raises(SystemExit, match="requires --records-path"):
            cli.main(["--dataset", "file", "--dry-run"])

    def test_bad_list_value(self):
        with pytest.raises(SystemExit, match="Invalid argument"):
            cli.main(["--dataset", "synthetic", "--sizes", "ten", "--dry-run"])

    def test_bad_synthetic_spec(self):
        with pytest.raises(SystemExit, match="missing_rate"):
            cli.main(["--dataset", "synthetic", "--missing-rates", "2.0", "--dry-run"])


def _write_runs(path, body):
    path.write_text("runs:\n" + body, encoding="utf-8")
    return path


class TestExperiments:
    def test_build_args(self):
        args = experiments.build_args(
            {
                "dataset": "synthetic",
                "sizes": [100, 1000],
                "no_memory": True,
                "no_warmup": False,
                "records_path": None,
                "delay": 0.5,
            }
        )
        assert args == ["--dataset", "synthetic", "--sizes", "100,1000", "--no-memory", "--delay", "0.5"]

    def test_build_args_rejects_mapping(self):
        with pytest.raises(ValueError, match="--sizes cannot take a mapping"):
            experiments.build_args({"sizes": {"small": 10}})

    def test_dry_run(self, tmp_path, capsys):
        config = _write_runs(
            tmp_path / "runs.yaml",
            "  - name: cars\n"
            "    args:\n"
            "      dataset: cars\n"
            "      output: results/cars.jsonl\n"
            "  - args:\n"
            "      dataset: synthetic\n"
            "      sizes: [10, 20]\n",
        )
        experiments.main([str(config), "--dry-run"])
        out = capsys.readouterr().out
        assert "Running 1/2: cars -> results/cars.jsonl" in out
        assert "Running 2/2: run_2 -> results/benchmark.jsonl" in out
        assert "groupby_bench.benchmarks.cli --dataset synthetic --sizes 10,20" in out

    def test_runs_each_in_subprocess(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(experiments.subprocess, "run", lambda cmd, check: calls.append(cmd))
        config = _write_runs(
            tmp_path / "runs.yaml",
            "  - name: a\n    args: {dataset: cars, output: a.jsonl}\n"
            "  - name: b\n    args: {dataset: cars, output: b.jsonl}\n",
        )
        experiments.main([str(config)])
        assert [cmd[-1] for cmd in calls] == ["a.jsonl", "b.jsonl"]

    @pytest.mark.parametrize(
        "third_run, message",
        [
            ("{dataset: cars, colour: red, output: c.jsonl}", "Run 'c' has invalid flags"),
            ("{dataset: cars, min_samples: 0, output: c.jsonl}", "Run 'c': min_samples must be at least 1"),
            ("{dataset: cars, methods: [reduce_spread], output: c.jsonl}", "Unknown methods"),
            ("{dataset: file, output: c.jsonl}", "Run 'c': --dataset file requires --records-path"),
            ("{dataset: cars, output: a.jsonl}", "Runs 'a' and 'c' both write a.jsonl"),
        ],
    )
    def test_bad_later_run_stops_before_any_run(self, tmp_path, monkeypatch, third_run, message):
        calls = []
        monkeypatch.setattr(experiments.subprocess, "run", lambda cmd, check: calls.append(cmd))
        config = _write_runs(
            tmp_path / "runs.yaml",
            "  - name: a\n    args: {dataset: cars, output: a.jsonl}\n"
            "  - name: b\n    args: {dataset: cars, output: b.jsonl}\n"
            f"  - name: c\n    args: {third_run}\n",
        )
        with pytest.raises(SystemExit, match=message):
            experiments.main([str(config)])
        assert calls == []

    def test_missing_config(self, tmp_path):
        with pytest.raises(SystemExit, match="not found"):
            experiments.main([str(tmp_path / "nope.yaml")])

    def test_empty_runs(self, tmp_path):
        config = tmp_path / "empty.yaml"
        config.write_text("runs: []\n", encoding="utf-8")
        with pytest.raises(SystemExit, match="non-empty 'runs'"):
            experiments.main([str(config)])

    def test_args_must_be_mapping(self, tmp_path):
        config = _write_runs(tmp_path / "bad.yaml", "  - name: x\n    args: [1, 2]\n")
        with pytest.raises(SystemExit, match="'args' mapping"):
            experiments.main([str(config)])
