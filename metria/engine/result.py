"""Immutable result value objects of the metrics engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from metria.models.enums import Scenario


@dataclass(frozen=True)
class ScenarioMetrics:
    """ROI figures for one scenario."""

    roi: float
    net_profit: float
    revenue: float
    total_cost: float
    label: str

    @classmethod
    def empty(cls, label: str = "N/A") -> ScenarioMetrics:
        return cls(roi=0.0, net_profit=0.0, revenue=0.0, total_cost=0.0, label=label)


@dataclass(frozen=True)
class RolloutYear:
    """Single year in the rollout projection."""

    year: int
    revenue: float
    cost: float
    profit: float
    accumulated_profit: float


@dataclass(frozen=True)
class CalculatedMetrics:
    """Top-level output of one metrics calculation."""

    payback_period_months: float
    innovation_score: float
    success_probability: float
    scenarios: dict[Scenario, ScenarioMetrics]
    total_cost: float
    confidence_score: float
    cost_benefit_ratio: float
    economic_value: float
    economic_gain: float
    risk_score: float = 0.0
    rollout_projections: list[RolloutYear] = field(default_factory=list)

    @property
    def realistic(self) -> ScenarioMetrics:
        return self.scenarios[Scenario.REALISTIC]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-shaped dict keyed by scenario name."""
        data = asdict(self)
        data["scenarios"] = {
            scenario.value: asdict(metrics)
            for scenario, metrics in self.scenarios.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalculatedMetrics:
        """Rebuild from the output of :meth:`to_dict`."""
        scenarios = {
            Scenario(name): ScenarioMetrics(**values)
            for name, values in data.get("scenarios", {}).items()
        }
        rollout = [RolloutYear(**year) for year in data.get("rollout_projections") or []]
        return cls(
            payback_period_months=data["payback_period_months"],
            innovation_score=data["innovation_score"],
            success_probability=data["success_probability"],
            scenarios=scenarios,
            total_cost=data["total_cost"],
            confidence_score=data["confidence_score"],
            cost_benefit_ratio=data["cost_benefit_ratio"],
            economic_value=data["economic_value"],
            economic_gain=data["economic_gain"],
            risk_score=data.get("risk_score", 0.0),
            rollout_projections=rollout,
        )
