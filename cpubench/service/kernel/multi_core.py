"""
Multi-core reference kernels.

Each kernel splits its workload into one task per worker and runs the tasks
on a process pool. Parallelism lives entirely inside the kernel call; the
orchestrator still sees one blocking invocation.
"""
import heapq
import math
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Callable, List, Sequence, Tuple

import numpy as np

from cpubench.config.workload_params import WorkloadParams
from cpubench.models.benchmark_result import BenchmarkResult
from cpubench.service.kernel import helpers
from cpubench.util.log_config import setup_logger

FIBONACCI_MEMO_SCALE = 10
FIBONACCI_MEMO_REPETITIONS = 500
MONTE_CARLO_TOLERANCE = 0.1

logger = setup_logger(__name__)


def run_parallel(fn: Callable[..., Any], task_args: Sequence[Tuple], workers: int) -> Tuple[List[Any], float]:
    """
    Run fn(*args) for every args tuple on a process pool.

    Timing starts after the pool exists and covers submission, execution and
    collection. Returns (values in task order, elapsed milliseconds).
    """
    with ProcessPoolExecutor(max_workers=workers) as pool:
        start = time.perf_counter()
        futures = [pool.submit(fn, *args) for args in task_args]
        values = [future.result() for future in futures]
        elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.debug(f"{fn.__name__}: {len(task_args)} task(s) on {workers} worker(s) in {elapsed_ms:.1f} ms")
    return values, elapsed_ms


def prime_generation(params: WorkloadParams, workers: int) -> BenchmarkResult:
    limit = params.prime_range
    workers = helpers.resolve_workers(workers)
    spans = helpers.split_range(limit + 1, workers)
    counts, elapsed_ms = run_parallel(helpers.segment_prime_count, spans, workers)
    total = sum(counts)
    return helpers.make_result(
        "Multi-Core Prime Generation", elapsed_ms, ops=limit,
        is_valid=helpers.expected_prime_count(limit, total),
        metrics={"prime_count": total, "range": limit, "workers": workers, "segments": len(spans)},
    )


def fibonacci_memoized(params: WorkloadParams, workers: int) -> BenchmarkResult:
    n = params.fibonacci_n_range[1] * FIBONACCI_MEMO_SCALE
    workers = helpers.resolve_workers(workers)
    tasks = [(n, FIBONACCI_MEMO_REPETITIONS)] * workers
    outputs, elapsed_ms = run_parallel(helpers.fibonacci_memoized_batch, tasks, workers)
    expected = helpers.fibonacci_iterative(n)
    lookups = sum(count for _, count in outputs)
    return helpers.make_result(
        "Multi-Core Fibonacci Memoized", elapsed_ms, ops=lookups,
        is_valid=all(value == expected for value, _ in outputs),
        metrics={"n": n, "repetitions": FIBONACCI_MEMO_REPETITIONS * workers,
                 "lookups": lookups, "workers": workers},
    )


def matrix_multiplication(params: WorkloadParams, workers: int) -> BenchmarkResult:
    size = params.matrix_size
    workers = helpers.resolve_workers(workers)
    a, b = helpers.random_matrices(size)
    spans = helpers.split_range(size, workers)
    blocks, elapsed_ms = run_parallel(helpers.multiply_rows, [(a[lo:hi], b) for lo, hi in spans], workers)
    c = np.vstack(blocks)
    flops = 2 * size ** 3
    return helpers.make_result(
        "Multi-Core Matrix Multiplication", elapsed_ms, ops=flops,
        is_valid=c.shape == (size, size) and helpers.matrix_checksum_ok(a, b, c),
        metrics={"size": size, "flops": flops, "checksum": round(float(c.sum()), 6), "workers": workers},
    )


def hash_computing(params: WorkloadParams, workers: int) -> BenchmarkResult:
    blocks = helpers.hash_block_count(params.hash_data_size_mb) * 2
    workers = helpers.resolve_workers(workers)
    spans = helpers.split_range(blocks, workers)
    tasks = [(hi - lo, helpers.DEFAULT_SEED + i) for i, (lo, hi) in enumerate(spans)]
    outputs, elapsed_ms = run_parallel(helpers.hash_blocks, tasks, workers)
    hashed = sum(count for count, _ in outputs)
    return helpers.make_result(
        "Multi-Core Hash Computing", elapsed_ms, ops=hashed,
        is_valid=hashed == blocks and all(len(digest) == 64 for _, digest in outputs),
        metrics={"blocks": hashed, "block_size": helpers.HASH_BLOCK_SIZE, "workers": workers},
    )


def string_sorting(params: WorkloadParams, workers: int) -> BenchmarkResult:
    values = helpers.generate_strings(params.string_count * 2)
    workers = helpers.resolve_workers(workers)
    spans = helpers.split_range(len(values), workers)

    start = time.perf_counter()
    chunks, _ = run_parallel(helpers.sort_strings, [(values[lo:hi],) for lo, hi in spans], workers)
    merged = list(heapq.merge(*chunks))
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    comparisons = helpers.comparison_estimate(len(values))
    return helpers.make_result(
        "Multi-Core String Sorting", elapsed_ms, ops=comparisons,
        is_valid=len(merged) == len(values) and helpers.is_sorted(merged),
        metrics={"count": len(values), "comparisons": round(comparisons), "workers": workers},
    )


def ray_tracing(params: WorkloadParams, workers: int) -> BenchmarkResult:
    width, height = params.ray_tracing_resolution
    depth = params.ray_tracing_depth
    workers = helpers.resolve_workers(workers)
    spans = helpers.split_range(height, workers)
    tasks = [(width, height, depth, lo, hi) for lo, hi in spans]
    outputs, elapsed_ms = run_parallel(helpers.render_rows, tasks, workers)
    brightness = sum(b for b, _ in outputs)
    rays = sum(r for _, r in outputs)
    return helpers.make_result(
        "Multi-Core Ray Tracing", elapsed_ms, ops=rays,
        is_valid=rays >= width * height and brightness > 0 and math.isfinite(brightness),
        metrics={"resolution": [width, height], "depth": depth, "rays": rays,
                 "brightness": round(brightness, 6), "workers": workers},
    )


def compression(params: WorkloadParams, workers: int) -> BenchmarkResult:
    data = helpers.compressible_data(params.compression_data_size_mb * 2 * 1024 * 1024)
    workers = helpers.resolve_workers(workers)
    spans = helpers.split_range(len(data), workers)
    outputs, elapsed_ms = run_parallel(helpers.compress_roundtrip, [(data[lo:hi],) for lo, hi in spans], workers)
    compressed_size = sum(size for size, _ in outputs)
    return helpers.make_result(
        "Multi-Core Compression", elapsed_ms, ops=len(data),
        is_valid=all(ok for _, ok in outputs) and compressed_size < len(data),
        metrics={"input_bytes": len(data), "compressed_bytes": compressed_size,
                 "ratio": round(len(data) / compressed_size, 3) if compressed_size else 0.0,
                 "workers": workers},
    )


def monte_carlo_pi(params: WorkloadParams, workers: int) -> BenchmarkResult:
    samples = params.monte_carlo_samples * 2
    workers = helpers.resolve_workers(workers)
    spans = helpers.split_range(samples, workers)
    tasks = [(hi - lo, helpers.DEFAULT_SEED + i) for i, (lo, hi) in enumerate(spans)]
    hits, elapsed_ms = run_parallel(helpers.monte_carlo_hits, tasks, workers)
    estimate = 4.0 * sum(hits) / samples if samples else 0.0
    error = abs(estimate - math.pi)
    return helpers.make_result(
        "Multi-Core Monte Carlo Pi", elapsed_ms, ops=samples,
        is_valid=samples > 0 and error < MONTE_CARLO_TOLERANCE,
        metrics={"samples": samples, "pi_estimate": estimate, "error": error, "workers": workers},
    )


def json_parsing(params: WorkloadParams, workers: int) -> BenchmarkResult:
    workers = helpers.resolve_workers(workers)
    documents = [helpers.generate_json(params.json_data_size_mb, helpers.DEFAULT_SEED + i) for i in range(workers)]
    counts, elapsed_ms = run_parallel(helpers.parse_and_count, [(text,) for text, _ in documents], workers)
    elements = sum(counts)
    return helpers.make_result(
        "Multi-Core JSON Parsing", elapsed_ms, ops=elements,
        is_valid=counts == [expected for _, expected in documents],
        metrics={"bytes": sum(len(text) for text, _ in documents), "elements": elements, "workers": workers},
    )


def nqueens(params: WorkloadParams, workers: int) -> BenchmarkResult:
    size = params.nqueens_size
    workers = helpers.resolve_workers(workers)
    columns = [list(range(i, size, workers)) for i in range(min(workers, size))]
    outputs, elapsed_ms = run_parallel(helpers.nqueens_count, [(size, cols) for cols in columns], workers)
    solutions = sum(s for s, _ in outputs)
    nodes = sum(n for _, n in outputs)
    known = helpers.KNOWN_NQUEENS_SOLUTIONS.get(size)
    return helpers.make_result(
        "Multi-Core N-Queens", elapsed_ms, ops=nodes,
        is_valid=known is None or solutions == known,
        metrics={"size": size, "solutions": solutions, "nodes": nodes, "workers": workers},
    )
