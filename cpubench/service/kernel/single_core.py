"""
Single-core reference kernels.

Each kernel runs its workload in the calling thread, times it, verifies the
outcome and returns a BenchmarkResult.
"""
import math

from cpubench.config.workload_params import WorkloadParams
from cpubench.models.benchmark_result import BenchmarkResult
from cpubench.service.kernel import helpers

MONTE_CARLO_TOLERANCE = 0.1


def prime_generation(params: WorkloadParams) -> BenchmarkResult:
    limit = params.prime_range
    count, elapsed_ms = helpers.measure(helpers.sieve_count, limit)
    return helpers.make_result(
        "Single-Core Prime Generation", elapsed_ms, ops=limit,
        is_valid=helpers.expected_prime_count(limit, count),
        metrics={"prime_count": count, "range": limit},
    )


def fibonacci_recursive(params: WorkloadParams) -> BenchmarkResult:
    low, high = params.fibonacci_n_range
    ns = list(range(low, high + 1))

    def run():
        return [helpers.fibonacci_recursive(n) for n in ns]

    values, elapsed_ms = helpers.measure(run)
    calls = sum(helpers.fibonacci_call_count(n) for n in ns)
    valid = values == [helpers.fibonacci_iterative(n) for n in ns]
    return helpers.make_result(
        "Single-Core Fibonacci Recursive", elapsed_ms, ops=calls, is_valid=valid,
        metrics={"n_range": [low, high], "calls": calls, "last_value": values[-1] if values else 0},
    )


def matrix_multiplication(params: WorkloadParams) -> BenchmarkResult:
    size = params.matrix_size
    a, b = helpers.random_matrices(size)
    c, elapsed_ms = helpers.measure(helpers.multiply_rows, a, b)
    flops = 2 * size ** 3
    return helpers.make_result(
        "Single-Core Matrix Multiplication", elapsed_ms, ops=flops,
        is_valid=helpers.matrix_checksum_ok(a, b, c),
        metrics={"size": size, "flops": flops, "checksum": round(float(c.sum()), 6)},
    )


def hash_computing(params: WorkloadParams) -> BenchmarkResult:
    blocks = helpers.hash_block_count(params.hash_data_size_mb)
    (hashed, digest), elapsed_ms = helpers.measure(helpers.hash_blocks, blocks, helpers.DEFAULT_SEED)
    return helpers.make_result(
        "Single-Core Hash Computing", elapsed_ms, ops=hashed,
        is_valid=hashed == blocks and len(digest) == 64,
        metrics={"blocks": hashed, "block_size": helpers.HASH_BLOCK_SIZE, "digest": digest},
    )


def string_sorting(params: WorkloadParams) -> BenchmarkResult:
    values = helpers.generate_strings(params.string_count)
    ordered, elapsed_ms = helpers.measure(helpers.sort_strings, values)
    comparisons = helpers.comparison_estimate(len(values))
    return helpers.make_result(
        "Single-Core String Sorting", elapsed_ms, ops=comparisons,
        is_valid=len(ordered) == len(values) and helpers.is_sorted(ordered),
        metrics={"count": len(values), "comparisons": round(comparisons)},
    )


def ray_tracing(params: WorkloadParams) -> BenchmarkResult:
    width, height = params.ray_tracing_resolution
    depth = params.ray_tracing_depth
    (brightness, rays), elapsed_ms = helpers.measure(helpers.render_rows, width, height, depth, 0, height)
    return helpers.make_result(
        "Single-Core Ray Tracing", elapsed_ms, ops=rays,
        is_valid=rays >= width * height and brightness > 0 and math.isfinite(brightness),
        metrics={"resolution": [width, height], "depth": depth, "rays": rays,
                 "brightness": round(brightness, 6)},
    )


def compression(params: WorkloadParams) -> BenchmarkResult:
    data = helpers.compressible_data(params.compression_data_size_mb * 1024 * 1024)
    (compressed_size, roundtrip_ok), elapsed_ms = helpers.measure(helpers.compress_roundtrip, data)
    return helpers.make_result(
        "Single-Core Compression", elapsed_ms, ops=len(data),
        is_valid=roundtrip_ok and compressed_size < len(data),
        metrics={"input_bytes": len(data), "compressed_bytes": compressed_size,
                 "ratio": round(len(data) / compressed_size, 3) if compressed_size else 0.0},
    )


def monte_carlo_pi(params: WorkloadParams) -> BenchmarkResult:
    samples = params.monte_carlo_samples
    hits, elapsed_ms = helpers.measure(helpers.monte_carlo_hits, samples, helpers.DEFAULT_SEED)
    estimate = 4.0 * hits / samples if samples else 0.0
    error = abs(estimate - math.pi)
    return helpers.make_result(
        "Single-Core Monte Carlo Pi", elapsed_ms, ops=samples,
        is_valid=samples > 0 and error < MONTE_CARLO_TOLERANCE,
        metrics={"samples": samples, "pi_estimate": estimate, "error": error},
    )


def json_parsing(params: WorkloadParams) -> BenchmarkResult:
    text, expected_elements = helpers.generate_json(params.json_data_size_mb)
    elements, elapsed_ms = helpers.measure(helpers.parse_and_count, text)
    return helpers.make_result(
        "Single-Core JSON Parsing", elapsed_ms, ops=elements,
        is_valid=elements == expected_elements,
        metrics={"bytes": len(text), "elements": elements},
    )


def nqueens(params: WorkloadParams) -> BenchmarkResult:
    size = params.nqueens_size
    (solutions, nodes), elapsed_ms = helpers.measure(helpers.nqueens_count, size)
    known = helpers.KNOWN_NQUEENS_SOLUTIONS.get(size)
    return helpers.make_result(
        "Single-Core N-Queens", elapsed_ms, ops=nodes,
        is_valid=known is None or solutions == known,
        metrics={"size": size, "solutions": solutions, "nodes": nodes},
    )
