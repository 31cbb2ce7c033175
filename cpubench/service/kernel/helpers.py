"""
Workload primitives shared by the single-core and multi-core kernels.

Everything here is a plain top-level function so multi-core kernels can ship
it to worker processes.
"""
import json
import math
import random
import string
import time
import zlib
from hashlib import sha256
from typing import Any, Callable, List, Mapping, Tuple

import numpy as np
import psutil

from cpubench.models.benchmark_result import BenchmarkResult

HASH_BLOCK_SIZE = 4096
COMPRESSION_CHUNK_SIZE = 64 * 1024
STRING_LENGTH = 16
DEFAULT_SEED = 42

# pi(n) for limits used by the shipped workload tiers
KNOWN_PRIME_COUNTS = {
    100: 25,
    1_000: 168,
    5_000: 669,
    10_000: 1_229,
    100_000: 9_592,
    200_000: 17_984,
    250_000: 22_044,
}

KNOWN_NQUEENS_SOLUTIONS = {
    1: 1, 2: 0, 3: 0, 4: 2, 5: 10, 6: 4, 7: 40, 8: 92,
    9: 352, 10: 724, 11: 2_680, 12: 14_200,
}


def resolve_workers(workers: int) -> int:
    """0 means one worker per logical CPU."""
    if workers > 0:
        return workers
    return psutil.cpu_count(logical=True) or 1


def measure(fn: Callable[..., Any], *args) -> Tuple[Any, float]:
    """Run fn(*args) and return (value, elapsed milliseconds)."""
    start = time.perf_counter()
    value = fn(*args)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return value, elapsed_ms


def ops_per_second(ops: float, elapsed_ms: float) -> float:
    if elapsed_ms <= 0:
        return 0.0
    return ops / (elapsed_ms / 1000.0)


def make_result(name: str, elapsed_ms: float, ops: float, is_valid: bool,
                metrics: Mapping[str, Any]) -> BenchmarkResult:
    return BenchmarkResult(
        name=name,
        execution_time_ms=max(elapsed_ms, 0.0),
        ops_per_second=ops_per_second(ops, elapsed_ms),
        is_valid=is_valid,
        metrics=dict(metrics),
    )


def split_range(total: int, parts: int) -> List[Tuple[int, int]]:
    """Split [0, total) into at most `parts` contiguous, non-empty spans."""
    parts = max(1, min(parts, total)) if total > 0 else 1
    step, remainder = divmod(total, parts)
    spans = []
    start = 0
    for i in range(parts):
        end = start + step + (1 if i < remainder else 0)
        if end > start:
            spans.append((start, end))
        start = end
    return spans


# -------------------------- primes --------------------------
def sieve_count(limit: int) -> int:
    """Count primes <= limit with the sieve of Eratosthenes."""
    if limit < 2:
        return 0
    is_prime = bytearray([1]) * (limit + 1)
    is_prime[0] = is_prime[1] = 0
    for p in range(2, math.isqrt(limit) + 1):
        if is_prime[p]:
            is_prime[p * p::p] = bytes(len(range(p * p, limit + 1, p)))
    return sum(is_prime)


def segment_prime_count(low: int, high: int) -> int:
    """Count primes in [low, high) with a segmented sieve."""
    low = max(low, 2)
    if high <= low:
        return 0
    base_limit = math.isqrt(high - 1)
    base = bytearray([1]) * (base_limit + 1)
    base_primes = []
    for p in range(2, base_limit + 1):
        if base[p]:
            base_primes.append(p)
            base[p * p::p] = bytes(len(range(p * p, base_limit + 1, p)))

    segment = bytearray([1]) * (high - low)
    for p in base_primes:
        first = max(p * p, ((low + p - 1) // p) * p)
        if first < high:
            segment[first - low::p] = bytes(len(range(first, high, p)))
    return sum(segment)


def expected_prime_count(limit: int, counted: int) -> bool:
    known = KNOWN_PRIME_COUNTS.get(limit)
    return counted > 0 and (known is None or known == counted)


# -------------------------- fibonacci --------------------------
def fibonacci_recursive(n: int) -> int:
    if n < 2:
        return n
    return fibonacci_recursive(n - 1) + fibonacci_recursive(n - 2)


def fibonacci_iterative(n: int) -> int:
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


def fibonacci_call_count(n: int) -> int:
    """Number of calls fibonacci_recursive(n) makes."""
    return 2 * fibonacci_iterative(n + 1) - 1


def fibonacci_memoized_batch(n: int, repetitions: int) -> Tuple[int, int]:
    """
    Compute fib(n) `repetitions` times, each with a fresh memo table.

    Returns (value, memo lookups performed).
    """
    lookups = 0
    value = 0
    for _ in range(repetitions):
        memo = {0: 0, 1: 1}
        for k in range(2, n + 1):
            memo[k] = memo[k - 1] + memo[k - 2]
            lookups += 2
        value = memo[n] if n > 1 else n
    return value, lookups


# -------------------------- matrix --------------------------
def random_matrices(size: int, seed: int = DEFAULT_SEED) -> Tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    return rng.random((size, size)), rng.random((size, size))


def multiply_rows(a_rows: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a_rows @ b


def matrix_checksum_ok(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> bool:
    """sum(A @ B) equals colsum(A) . rowsum(B)."""
    expected = float(a.sum(axis=0) @ b.sum(axis=1))
    return math.isclose(float(c.sum()), expected, rel_tol=1e-9)


# -------------------------- hashing --------------------------
def hash_blocks(block_count: int, seed: int) -> Tuple[int, str]:
    """SHA-256 `block_count` chained 4 KiB blocks; returns (count, final hex digest)."""
    rng = random.Random(seed)
    block = bytes(rng.getrandbits(8) for _ in range(HASH_BLOCK_SIZE))
    digest = b""
    hashed = 0
    for _ in range(block_count):
        digest = sha256(digest + block).digest()
        hashed += 1
    return hashed, digest.hex()


def hash_block_count(data_size_mb: int) -> int:
    return max(1, data_size_mb * 1024 * 1024 // HASH_BLOCK_SIZE)


# -------------------------- strings --------------------------
def generate_strings(count: int, seed: int = DEFAULT_SEED) -> List[str]:
    rng = random.Random(seed)
    alphabet = string.ascii_letters + string.digits
    return ["".join(rng.choices(alphabet, k=STRING_LENGTH)) for _ in range(count)]


def sort_strings(values: List[str]) -> List[str]:
    return sorted(values)


def is_sorted(values: List[str]) -> bool:
    return all(values[i] <= values[i + 1] for i in range(len(values) - 1))


def comparison_estimate(count: int) -> float:
    return count * math.log2(count) if count > 1 else float(count)


# -------------------------- ray tracing --------------------------
# (center, radius, reflectivity)
SCENE = (
    ((0.0, -0.5, 3.0), 1.0, 0.5),
    ((1.8, 0.2, 4.0), 1.0, 0.3),
    ((-1.8, 0.2, 4.0), 1.0, 0.3),
    ((0.0, -5001.0, 0.0), 5000.0, 0.1),
)
LIGHT = (-0.577, 0.577, -0.577)


def _hit_sphere(origin, direction, center, radius):
    ox, oy, oz = origin[0] - center[0], origin[1] - center[1], origin[2] - center[2]
    dx, dy, dz = direction
    b = ox * dx + oy * dy + oz * dz
    c = ox * ox + oy * oy + oz * oz - radius * radius
    disc = b * b - c
    if disc < 0:
        return None
    t = -b - math.sqrt(disc)
    return t if t > 1e-4 else None


def _trace(origin, direction, depth) -> Tuple[float, int]:
    """Returns (brightness, rays cast)."""
    nearest = None
    for center, radius, reflectivity in SCENE:
        t = _hit_sphere(origin, direction, center, radius)
        if t is not None and (nearest is None or t < nearest[0]):
            nearest = (t, center, radius, reflectivity)
    if nearest is None:
        return 0.2, 1

    t, center, radius, reflectivity = nearest
    point = tuple(origin[i] + direction[i] * t for i in range(3))
    normal = tuple((point[i] - center[i]) / radius for i in range(3))
    diffuse = max(0.0, sum(normal[i] * LIGHT[i] for i in range(3)))
    if depth <= 0 or reflectivity <= 0:
        return diffuse, 1

    dot = sum(direction[i] * normal[i] for i in range(3))
    reflected = tuple(direction[i] - 2 * dot * normal[i] for i in range(3))
    bounce, rays = _trace(point, reflected, depth - 1)
    return diffuse * (1 - reflectivity) + bounce * reflectivity, rays + 1


def render_rows(width: int, height: int, depth: int, row_start: int, row_end: int) -> Tuple[float, int]:
    """Render rows [row_start, row_end); returns (brightness sum, rays cast)."""
    total = 0.0
    rays = 0
    aspect = width / height
    for y in range(row_start, row_end):
        for x in range(width):
            px = (2 * (x + 0.5) / width - 1) * aspect
            py = 1 - 2 * (y + 0.5) / height
            norm = math.sqrt(px * px + py * py + 1)
            brightness, cast = _trace((0.0, 0.0, 0.0), (px / norm, py / norm, 1 / norm), depth)
            total += brightness
            rays += cast
    return total, rays


# -------------------------- compression --------------------------
def compressible_data(size_bytes: int, seed: int = DEFAULT_SEED) -> bytes:
    """Repetitive text with random noise, roughly 3:1 compressible."""
    rng = random.Random(seed)
    words = [b"bench", b"score", b"core", b"kernel", b"result", b"thread"]
    out = bytearray()
    while len(out) < size_bytes:
        out += rng.choice(words)
        out += bytes([rng.getrandbits(8)]) if rng.random() < 0.1 else b" "
    return bytes(out[:size_bytes])


def compress_roundtrip(data: bytes) -> Tuple[int, bool]:
    """Compress and decompress in 64 KiB chunks; returns (compressed size, round-trip ok)."""
    compressed_size = 0
    ok = True
    for offset in range(0, len(data), COMPRESSION_CHUNK_SIZE):
        chunk = data[offset:offset + COMPRESSION_CHUNK_SIZE]
        packed = zlib.compress(chunk, 6)
        compressed_size += len(packed)
        ok = ok and zlib.decompress(packed) == chunk
    return compressed_size, ok


# -------------------------- monte carlo --------------------------
def monte_carlo_hits(samples: int, seed: int) -> int:
    rng = random.Random(seed)
    hits = 0
    for _ in range(samples):
        x = rng.random()
        y = rng.random()
        if x * x + y * y <= 1.0:
            hits += 1
    return hits


# -------------------------- json --------------------------
def generate_json(size_mb: int, seed: int = DEFAULT_SEED) -> Tuple[str, int]:
    """Build a JSON document of about size_mb; returns (text, element count)."""
    rng = random.Random(seed)
    target = size_mb * 1024 * 1024
    records = []
    length = 2
    elements = 1
    while length < target:
        record = {
            "id": len(records),
            "name": "".join(rng.choices(string.ascii_lowercase, k=12)),
            "score": round(rng.random() * 1000, 3),
            "tags": [rng.choice(["cpu", "gpu", "ram", "io"]) for _ in range(3)],
            "nested": {"valid": rng.random() > 0.5, "depth": rng.randint(1, 5)},
        }
        records.append(record)
        elements += count_json_elements(record)
        length += len(json.dumps(record)) + 2
    return json.dumps(records), elements


def count_json_elements(node: Any) -> int:
    if isinstance(node, dict):
        return 1 + sum(count_json_elements(v) for v in node.values())
    if isinstance(node, list):
        return 1 + sum(count_json_elements(v) for v in node)
    return 1


def parse_and_count(text: str) -> int:
    return count_json_elements(json.loads(text))


# -------------------------- n-queens --------------------------
def nqueens_count(size: int, first_columns=None) -> Tuple[int, int]:
    """
    Count N-Queens solutions with bitmask backtracking.

    first_columns restricts the queen in row 0 (used to split work between
    workers). Returns (solutions, nodes visited).
    """
    full = (1 << size) - 1
    solutions = 0
    nodes = 0

    def place(cols: int, diag1: int, diag2: int) -> None:
        nonlocal solutions, nodes
        if cols == full:
            solutions += 1
            return
        free = full & ~(cols | diag1 | diag2)
        while free:
            bit = free & -free
            free ^= bit
            nodes += 1
            place(cols | bit, ((diag1 | bit) << 1) & full, (diag2 | bit) >> 1)

    columns = range(size) if first_columns is None else first_columns
    for col in columns:
        bit = 1 << col
        nodes += 1
        place(bit, (bit << 1) & full, bit >> 1)
    return solutions, nodes


