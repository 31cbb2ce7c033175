"""Tests for argument parsing and the cpubench entry point."""

import json
import logging
from unittest.mock import patch

import pytest

from cpubench.cli import run_suite
from cpubench.cli.cli import parse_run_args
from cpubench.config.suite import DEFAULT_SUITE
from cpubench.consts.BenchmarkId import BenchmarkId
from cpubench.service.kernel.registry import KernelRegistry
from cpubench.util import log_config

from conftest import make_result


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    log_config.configure_logging(logging.INFO, None)


def fake_registry(params, workers) -> KernelRegistry:
    return KernelRegistry({
        e.kernel_id: (lambda name=e.display_name: make_result(name, 1000.0)) for e in DEFAULT_SUITE
    })


class TestArgs:

    def test_defaults(self) -> None:
        args = parse_run_args([])
        assert args.env is None
        assert args.tier is None
        assert args.workers is None
        assert args.out == ""
        assert args.verbose is False

    def test_all_options(self) -> None:
        args = parse_run_args(["--env", "dev", "--tier", "mid", "--workers", "3",
                               "--out", "x.json", "--log-file", "run.log", "--verbose"])
        assert (args.env, args.tier, args.workers, args.out, args.log_file, args.verbose) == \
            ("dev", "mid", 3, "x.json", "run.log", True)

    def test_rejects_bad_tier(self) -> None:
        with pytest.raises(SystemExit):
            parse_run_args(["--tier", "ultra"])

    def test_rejects_negative_workers(self) -> None:
        with pytest.raises(SystemExit):
            parse_run_args(["--workers", "-2"])


class TestMain:

    def test_completed_run_writes_summary(self, tmp_path, capsys) -> None:
        out = tmp_path / "out" / "summary.json"
        with patch.object(run_suite, "build_default_registry", side_effect=fake_registry):
            status = run_suite.main(["--env", "dev", "--out", str(out)])

        assert status == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["perTestResults"]) == 20
        assert data["singleCoreScore"] == pytest.approx(19.1965)
        printed = capsys.readouterr().out
        assert "Single-Core Prime Generation" in printed
        assert "Normalized Score" in printed

    def test_failed_run_exits_one(self, tmp_path, capsys) -> None:
        out = tmp_path / "summary.json"
        with patch.object(run_suite, "build_default_registry", side_effect=fake_registry), \
                patch.object(run_suite.ScoreAggregator, "aggregate", side_effect=RuntimeError("boom")):
            status = run_suite.main(["--env", "dev", "--out", str(out)])

        assert status == 1
        assert not out.exists()
        printed = capsys.readouterr().out
        assert "Benchmark run failed: boom" in printed
        assert "☆☆☆☆☆" in printed

    def test_failing_kernel_still_completes(self, tmp_path) -> None:
        def registry_with_failure(params, workers):
            registry = fake_registry(params, workers)

            def broken():
                raise RuntimeError("kernel crashed")

            registry._kernels[BenchmarkId.MULTI_COMPRESSION] = broken
            return registry

        out = tmp_path / "summary.json"
        with patch.object(run_suite, "build_default_registry", side_effect=registry_with_failure):
            status = run_suite.main(["--env", "dev", "--out", str(out)])

        assert status == 0
        results = json.loads(out.read_text(encoding="utf-8"))["perTestResults"]
        broken = next(r for r in results if r["name"] == "Multi-Core Compression")
        assert broken["isValid"] is False
        assert broken["opsPerSecond"] == 0

    def test_log_file_receives_info(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "run.log"
        with patch.object(run_suite, "build_default_registry", side_effect=fake_registry):
            run_suite.main(["--env", "dev", "--out", str(tmp_path / "s.json"), "--log-file", str(log_file)])

        text = log_file.read_text(encoding="utf-8")
        assert "[INFO] cpubench.cli.run_suite - Starting CPU Benchmark" in text
        assert "Invoking kernel" not in text

    def test_verbose_logs_debug(self, tmp_path) -> None:
        log_file = tmp_path / "run.log"
        with patch.object(run_suite, "build_default_registry", side_effect=fake_registry):
            run_suite.main(["--env", "dev", "--out", str(tmp_path / "s.json"),
                            "--log-file", str(log_file), "--verbose"])

        assert "Invoking kernel single_core_prime_generation" in log_file.read_text(encoding="utf-8")

    def test_tier_missing_from_config_exits_one(self, tmp_path, capsys) -> None:
        out = tmp_path / "summary.json"
        with patch.object(run_suite, "build_default_registry", side_effect=fake_registry) as build:
            status = run_suite.main(["--env", "dev", "--tier", "mid", "--out", str(out)])

        assert status == 1
        build.assert_not_called()
        assert not out.exists()
        assert "No workload configured for tier 'mid'" in capsys.readouterr().err
