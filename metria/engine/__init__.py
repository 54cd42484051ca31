from .calculator import (
    MetricsEngine,
    ProEngine,
    StandardEngine,
    compute_metrics,
    get_engine,
)
from .result import CalculatedMetrics, RolloutYear, ScenarioMetrics

__all__ = [
    "MetricsEngine",
    "StandardEngine",
    "ProEngine",
    "compute_metrics",
    "get_engine",
    "CalculatedMetrics",
    "ScenarioMetrics",
    "RolloutYear",
]
