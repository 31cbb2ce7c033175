"""
Kernel registry.

Maps every BenchmarkId to a zero-argument callable returning a
BenchmarkResult. The orchestrator only ever talks to kernels through
KernelRegistry.invoke().
"""
from functools import partial
from typing import Callable, Dict, Iterable, List, Mapping, Union

from cpubench.config.workload_params import WorkloadParams
from cpubench.consts.BenchmarkId import BenchmarkId
from cpubench.models.benchmark_result import BenchmarkResult
from cpubench.service.kernel import multi_core, single_core
from cpubench.util.log_config import setup_logger

Kernel = Callable[[], BenchmarkResult]

logger = setup_logger(__name__)


class UnknownKernelError(KeyError):
    """Raised when no kernel is registered for an identifier."""


class KernelRegistry:

    def __init__(self, kernels: Mapping[BenchmarkId, Kernel]):
        self._kernels: Dict[BenchmarkId, Kernel] = dict(kernels)

    def __contains__(self, kernel_id: BenchmarkId) -> bool:
        return kernel_id in self._kernels

    def __len__(self) -> int:
        return len(self._kernels)

    def invoke(self, kernel_id: Union[BenchmarkId, str]) -> BenchmarkResult:
        """
        Run the kernel registered under kernel_id and return its result.

        Args:
            kernel_id: BenchmarkId member or its string value

        Raises:
            UnknownKernelError: if kernel_id is not registered
        """
        if not isinstance(kernel_id, BenchmarkId):
            try:
                kernel_id = BenchmarkId(kernel_id)
            except ValueError:
                raise UnknownKernelError(f"Unknown kernel identifier: {kernel_id!r}") from None

        kernel = self._kernels.get(kernel_id)
        if kernel is None:
            raise UnknownKernelError(f"No kernel registered for {kernel_id.value}")

        logger.debug(f"Invoking kernel {kernel_id.value}")
        return kernel()

    def missing_kernels(self, kernel_ids: Iterable[BenchmarkId]) -> List[BenchmarkId]:
        return [k for k in kernel_ids if k not in self._kernels]


def build_default_registry(params: WorkloadParams, workers: int = 0) -> KernelRegistry:
    """
    Bind every reference kernel to one workload.

    Args:
        params: Workload sizes for the selected device tier
        workers: Worker processes for multi-core kernels (0 = one per logical CPU)
    """
    single = {
        BenchmarkId.SINGLE_PRIME_GENERATION: single_core.prime_generation,
        BenchmarkId.SINGLE_FIBONACCI_RECURSIVE: single_core.fibonacci_recursive,
        BenchmarkId.SINGLE_MATRIX_MULTIPLICATION: single_core.matrix_multiplication,
        BenchmarkId.SINGLE_HASH_COMPUTING: single_core.hash_computing,
        BenchmarkId.SINGLE_STRING_SORTING: single_core.string_sorting,
        BenchmarkId.SINGLE_RAY_TRACING: single_core.ray_tracing,
        BenchmarkId.SINGLE_COMPRESSION: single_core.compression,
        BenchmarkId.SINGLE_MONTE_CARLO: single_core.monte_carlo_pi,
        BenchmarkId.SINGLE_JSON_PARSING: single_core.json_parsing,
        BenchmarkId.SINGLE_N_QUEENS: single_core.nqueens,
    }
    multi = {
        BenchmarkId.MULTI_PRIME_GENERATION: multi_core.prime_generation,
        BenchmarkId.MULTI_FIBONACCI_MEMOIZED: multi_core.fibonacci_memoized,
        BenchmarkId.MULTI_MATRIX_MULTIPLICATION: multi_core.matrix_multiplication,
        BenchmarkId.MULTI_HASH_COMPUTING: multi_core.hash_computing,
        BenchmarkId.MULTI_STRING_SORTING: multi_core.string_sorting,
        BenchmarkId.MULTI_RAY_TRACING: multi_core.ray_tracing,
        BenchmarkId.MULTI_COMPRESSION: multi_core.compression,
        BenchmarkId.MULTI_MONTE_CARLO: multi_core.monte_carlo_pi,
        BenchmarkId.MULTI_JSON_PARSING: multi_core.json_parsing,
        BenchmarkId.MULTI_N_QUEENS: multi_core.nqueens,
    }

    kernels: Dict[BenchmarkId, Kernel] = {}
    for kernel_id, fn in single.items():
        kernels[kernel_id] = partial(fn, params)
    for kernel_id, fn in multi.items():
        kernels[kernel_id] = partial(fn, params, workers)
    return KernelRegistry(kernels)
