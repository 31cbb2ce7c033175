#!/usr/bin/env python3
"""
CPU benchmark runner.

Loads configuration, runs the benchmark suite on a worker thread while
following its events, then prints the results and exports the summary.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from tabulate import tabulate

from cpubench.cli.cli import parse_run_args
from cpubench.config.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from cpubench.models.benchmark_result import ScoreSummary
from cpubench.models.run_state import Completed, Failed
from cpubench.service.event_stream.event_stream import EventStream, Subscription
from cpubench.service.export.summary_exporter import save_summary
from cpubench.service.kernel.registry import build_default_registry
from cpubench.service.monitor.host_monitor import HostMonitor
from cpubench.service.orchestrator.run_orchestrator import RunOrchestrator
from cpubench.service.orchestrator.state_store import RunStateStore
from cpubench.service.scoring.score_aggregator import ScoreAggregator
from cpubench.util.log_config import configure_logging, setup_logger

EVENT_POLL_TIMEOUT = 0.2  # seconds

logger = setup_logger(__name__)


def print_results_table(summary: ScoreSummary, aggregator: ScoreAggregator) -> None:
    headers = ["Benchmark", "Time (ms)", "Ops/s", "Score", "Valid"]
    rows = []
    for result, (_, score) in zip(summary.per_test_results, aggregator.per_test_scores(summary.per_test_results)):
        rows.append([
            result.name,
            f"{result.execution_time_ms:.1f}",
            f"{result.ops_per_second:,.2f}",
            f"{score:.4f}",
            "✓" if result.is_valid else "✗",
        ])
    print(tabulate(rows, headers=headers, tablefmt="github", stralign="left", numalign="right"))


def print_score_table(summary: ScoreSummary) -> None:
    rows = [
        ["Single-Core Score", f"{summary.single_core_score:.2f}"],
        ["Multi-Core Score", f"{summary.multi_core_score:.2f}"],
        ["Core Ratio", f"{summary.core_ratio:.2f}x"],
        ["Final Weighted Score", f"{summary.final_weighted_score:.2f}"],
        ["Normalized Score", f"{summary.normalized_score:.2f}"],
        ["Rating", summary.rating],
    ]
    print(tabulate(rows, headers=["Metric", "Value"], tablefmt="heavy_grid", stralign="right"))


def follow_events(subscription: Subscription, state_store: RunStateStore, total: int) -> None:
    """Log one line per completed benchmark until the run is over."""
    seen = 0
    while True:
        event = subscription.get(timeout=EVENT_POLL_TIMEOUT)
        if event is not None:
            seen += 1
            logger.info(f"  [{seen}/{total}] {event}")
            continue
        if state_store.value.is_terminal:
            for event in subscription.drain():
                seen += 1
                logger.info(f"  [{seen}/{total}] {event}")
            return


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for a benchmark run.

    1. Load configuration and resolve the workload tier
    2. Build registry, stream, store, aggregator and orchestrator
    3. Run the suite on a worker thread, logging events as they arrive
    4. Print tables and export the summary

    Returns:
        Process exit status: 0 on Completed, 1 on Failed or a bad configuration
    """
    args = parse_run_args(argv, "Run the CPU benchmark suite and score the results")
    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    logger.info("=" * 60)
    logger.info("Starting CPU Benchmark")
    logger.info("=" * 60)

    config_path = Path(args.config_dir) if args.config_dir else DEFAULT_CONFIG_PATH
    try:
        config = ConfigLoader(config_path, env=args.env)
        tier = config.resolve_tier(args.tier)
        params = config.config_data.workload_for(tier)
    except (KeyError, ValueError) as e:
        message = e.args[0] if e.args else type(e).__name__
        logger.error(f"Invalid configuration: {message}")
        print(f"Error: {message}", file=sys.stderr)
        return 1
    if args.env:
        logger.info(f"Loaded configuration with environment override: {args.env}")

    workers = config.config_data.workers if args.workers is None else args.workers
    logger.info(f"Workload tier: {tier.value}, workers: {workers or 'auto'}")

    aggregator = ScoreAggregator(config.config_data.scoring)
    registry = build_default_registry(params, workers)
    event_stream = EventStream(config.config_data.event_queue_size)
    state_store = RunStateStore()
    orchestrator = RunOrchestrator(registry, event_stream, state_store, aggregator)
    monitor = HostMonitor(config.config_data.monitor_interval)

    logger.info("")
    with event_stream.subscribe() as subscription:
        monitor.start()
        thread = orchestrator.start()
        if thread is not None:
            follow_events(subscription, state_store, len(orchestrator.suite))
            thread.join()
        if subscription.dropped:
            logger.warning(f"⚠ {subscription.dropped} progress event(s) dropped")
    host_stats = monitor.stop()

    state = state_store.value
    logger.info("")
    logger.info("=" * 60)
    logger.info("Results")
    logger.info("=" * 60)

    if isinstance(state, Failed):
        logger.error(f"Benchmark run failed: {state.message}")
        print_score_table(ScoreSummary.zeroed(config.config_data.scoring.lowest_rating))
        return 1

    if not isinstance(state, Completed):
        logger.error(f"Benchmark run did not finish (state: {type(state).__name__})")
        return 1

    summary = state.summary
    print_results_table(summary, aggregator)
    print()
    print_score_table(summary)

    if host_stats is not None:
        logger.info(f"Host CPU(avg)={host_stats.avg_cpu_percent:.1f}%, CPU(peak)={host_stats.peak_cpu_percent:.1f}%, "
                    f"Memory(peak)={host_stats.peak_memory_percent:.1f}% over {host_stats.samples_count} samples")

    out_path = Path(args.out) if args.out else Path(config.config_data.cwd) / "summary.json"
    saved = save_summary(summary, out_path)
    logger.info(f"✓ Summary exported to: {saved}")
    logger.info("Benchmark completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
