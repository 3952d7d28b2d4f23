"""Unified service factory with singleton support.

Usage:
    @service_factory
    def get_my_service() -> MyService:
        return MyService()

    # With parameters (one instance per unique parameter combination)
    @service_factory
    def get_pdf_exporter(scale: float = 2.0) -> PdfExporterService:
        return PdfExporterService(scale=scale)
"""

import functools
import threading
from typing import Any, Callable, TypeVar, ParamSpec

P = ParamSpec("P")
T = TypeVar("T")


def service_factory(func: Callable[P, T]) -> Callable[P, T]:
    """Decorator that converts a factory function into a cached singleton factory.

    For functions with no arguments (or only default arguments), creates a true singleton.
    For functions with arguments, caches instances by argument values.

    Args:
        func: Factory function that creates service instances

    Returns:
        Wrapped function that returns cached singleton instances
    """
    cache: dict[tuple, Any] = {}
    lock = threading.Lock()

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        key = (args, tuple(sorted(kwargs.items())))

        if key not in cache:
            with lock:
                # Double-check after acquiring lock
                if key not in cache:
                    cache[key] = func(*args, **kwargs)

        return cache[key]

    # Add method to clear cache (useful for testing)
    wrapper.clear_cache = lambda: cache.clear()  # type: ignore
    wrapper.cache_info = lambda: {"size": len(cache), "keys": list(cache.keys())}  # type: ignore

    return wrapper


def clear_all_service_caches() -> None:
    """Clear all service singleton caches.

    Note: only factories in modules that have already been imported are cleared.
    """
    import sys

    services_module = "quote_generator.services"
    for module_name in list(sys.modules.keys()):
        if module_name.startswith(services_module):
            module = sys.modules[module_name]
            for attr_name in dir(module):
                attr = getattr(module, attr_name, None)
                if callable(attr) and not isinstance(attr, type) and hasattr(attr, "clear_cache"):
                    attr.clear_cache()
