from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from quallaa.models.metrics import ROIMetrics

MetricExtractor = Callable[[ROIMetrics], float]

# Global registry -- maps every accepted dotted path -> MetricAccessor
_REGISTRY: dict[str, MetricAccessor] = {}


@dataclass(frozen=True)
class MetricAccessor:
    """A named, typed way of reading one number out of an ROIMetrics."""

    path: str
    label: str
    extract: MetricExtractor
    aliases: tuple[str, ...] = ()


def register_metric(
    path: str,
    label: str,
    aliases: tuple[str, ...] = (),
) -> Callable[[MetricExtractor], MetricExtractor]:
    """Decorator to register an extraction function under a dotted path."""

    def decorator(fn: MetricExtractor) -> MetricExtractor:
        accessor = MetricAccessor(path=path, label=label, extract=fn, aliases=aliases)
        for name in (path, *aliases):
            _REGISTRY[name] = accessor
        return fn

    return decorator


def get_metric(path: str) -> Optional[MetricAccessor]:
    """Look up an accessor by its path or one of its aliases."""
    return _REGISTRY.get(path)


def get_all_metrics() -> dict[str, MetricAccessor]:
    """Return the registry keyed by canonical path (read-only copy)."""
    return {accessor.path: accessor for accessor in _REGISTRY.values()}


def extract_metric_value(metrics: ROIMetrics, path: str) -> float:
    """Read the metric at path; unknown paths read as 0."""
    accessor = get_metric(path)
    if accessor is None:
        return 0.0
    return float(accessor.extract(metrics))
