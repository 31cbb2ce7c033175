from .registry import KernelRegistry, UnknownKernelError, build_default_registry

__all__ = ["KernelRegistry", "UnknownKernelError", "build_default_registry"]
