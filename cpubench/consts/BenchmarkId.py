from enum import Enum


class BenchmarkId(Enum):
    """Identifiers of every kernel the registry can run."""

    SINGLE_PRIME_GENERATION = "single_core_prime_generation"
    SINGLE_FIBONACCI_RECURSIVE = "single_core_fibonacci_recursive"
    SINGLE_MATRIX_MULTIPLICATION = "single_core_matrix_multiplication"
    SINGLE_HASH_COMPUTING = "single_core_hash_computing"
    SINGLE_STRING_SORTING = "single_core_string_sorting"
    SINGLE_RAY_TRACING = "single_core_ray_tracing"
    SINGLE_COMPRESSION = "single_core_compression"
    SINGLE_MONTE_CARLO = "single_core_monte_carlo_pi"
    SINGLE_JSON_PARSING = "single_core_json_parsing"
    SINGLE_N_QUEENS = "single_core_n_queens"

    MULTI_PRIME_GENERATION = "multi_core_prime_generation"
    MULTI_FIBONACCI_MEMOIZED = "multi_core_fibonacci_memoized"
    MULTI_MATRIX_MULTIPLICATION = "multi_core_matrix_multiplication"
    MULTI_HASH_COMPUTING = "multi_core_hash_computing"
    MULTI_STRING_SORTING = "multi_core_string_sorting"
    MULTI_RAY_TRACING = "multi_core_ray_tracing"
    MULTI_COMPRESSION = "multi_core_compression"
    MULTI_MONTE_CARLO = "multi_core_monte_carlo_pi"
    MULTI_JSON_PARSING = "multi_core_json_parsing"
    MULTI_N_QUEENS = "multi_core_n_queens"
