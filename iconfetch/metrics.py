"""Prometheus metrics for icon resolution."""

from functools import cache

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class IconMetrics:
    """Counters and timings recorded by the icon resolver."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.registry = registry
        self.cache_lookups = Counter(
            "iconfetch_cache_lookups",
            "Icon cache lookups by result",
            ["result"],
            registry=registry,
        )
        self.not_found = Counter(
            "iconfetch_icons_not_found",
            "Lookups that ended without a usable icon",
            registry=registry,
        )
        self.resolve_duration = Histogram(
            "iconfetch_resolve_duration_seconds",
            "Time spent discovering and validating icons for one URL",
            registry=registry,
        )


@cache
def get_metrics() -> IconMetrics:
    """Instantiate and memoize the metrics registered on the default registry."""
    return IconMetrics()
