"""Core metrics engine.

Takes one ``ProjectInputs`` -> produces ``CalculatedMetrics``. Standard and
Pro projects are handled by two engine variants with their own formulas;
``compute_metrics`` picks the variant from the project mode.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from metria.engine.costs import aggregate_costs
from metria.engine.numeric import round_half_up, safe_div
from metria.engine.result import CalculatedMetrics, ScenarioMetrics
from metria.engine.rollout import project_rollout
from metria.engine.scoring import (
    ROLLOUT_THRESHOLD,
    innovation_score_pro,
    innovation_score_standard,
    score_confidence,
    score_risk,
    success_probability_pro,
)
from metria.engine.value_types import resolve_value_volume
from metria.models.enums import ProjectMode, Scenario
from metria.models.inputs import CostInputs, ProjectInputs, ScenarioInput

SCENARIO_LABELS = {
    Scenario.PESSIMISTIC: "Pessimista",
    Scenario.REALISTIC: "Realista",
    Scenario.OPTIMISTIC: "Otimista",
}

# Applied to the realistic economic value when a scenario has no explicit input.
SCENARIO_MULTIPLIERS = {
    Scenario.PESSIMISTIC: 0.7,
    Scenario.OPTIMISTIC: 1.3,
}

STANDARD_SUCCESS_PROBABILITY = 50.0

# Annual scale cost when neither a realistic scenario nor a scale duration is given.
FALLBACK_SCALE_COST_MULTIPLIER = 4


def economic_value(
    unit_value: float,
    volume: float,
    duration_months: float,
    efficiency: float = 1.0,
) -> float:
    """VE = unit value x volume x efficiency x duration"""
    return unit_value * volume * efficiency * duration_months


def roi_percent(gain: float, cost: float) -> float:
    """GE / cost x 100, or 0 when there is no positive cost."""
    return gain / cost * 100 if cost > 0 else 0.0


def per_month(value: float, duration_months: float) -> float:
    """Monthly share of ``value``; 0 for a non-positive duration."""
    if duration_months <= 0:
        return 0.0
    return value / duration_months


def build_scenario(label: str, value: float, total_cost: float) -> ScenarioMetrics:
    """Round a scenario's economic value and cost into a ScenarioMetrics."""
    gain = value - total_cost
    return ScenarioMetrics(
        roi=round_half_up(roi_percent(gain, total_cost)),
        net_profit=round_half_up(gain),
        revenue=round_half_up(value),
        total_cost=round_half_up(total_cost),
        label=label,
    )


class MetricsEngine(ABC):
    """Stateless engine that turns project inputs into metrics."""

    mode: ProjectMode

    @abstractmethod
    def calculate(self, inputs: ProjectInputs) -> CalculatedMetrics:
        """Run every formula of this engine variant."""
        ...


class StandardEngine(MetricsEngine):
    """Light model: one realistic scenario and fixed heuristics."""

    mode = ProjectMode.STANDARD

    def calculate(self, inputs: ProjectInputs) -> CalculatedMetrics:
        duration = inputs.costs.duration_months
        total_cost = aggregate_costs(inputs.costs, self.mode).total

        unit_value, volume = resolve_value_volume(
            inputs.value_type, inputs.metrics, ticket_delta=False
        )
        value = economic_value(unit_value, volume, duration)
        gain = value - total_cost
        roi = roi_percent(gain, total_cost)

        monthly_value = per_month(value, duration)
        payback = 0.0
        if gain > 0 and monthly_value > 0:
            payback = total_cost / monthly_value

        return CalculatedMetrics(
            payback_period_months=round_half_up(payback, 1),
            innovation_score=innovation_score_standard(roi),
            success_probability=STANDARD_SUCCESS_PROBABILITY,
            scenarios={
                Scenario.PESSIMISTIC: ScenarioMetrics.empty(),
                Scenario.REALISTIC: build_scenario(
                    SCENARIO_LABELS[Scenario.REALISTIC], value, total_cost
                ),
                Scenario.OPTIMISTIC: ScenarioMetrics.empty(),
            },
            total_cost=round_half_up(total_cost),
            confidence_score=0.0,
            cost_benefit_ratio=0.0,
            economic_value=round_half_up(value),
            economic_gain=round_half_up(gain),
        )


class ProEngine(MetricsEngine):
    """Full model: scenarios, confidence checklist, risk matrix and rollout."""

    mode = ProjectMode.PRO

    def calculate(self, inputs: ProjectInputs) -> CalculatedMetrics:
        costs = inputs.costs
        duration = costs.duration_months
        total_cost = aggregate_costs(costs, self.mode).total

        unit_value, volume = resolve_value_volume(inputs.value_type, inputs.metrics)

        # Realistic economic value -- explicit scenario input wins
        realistic_input = inputs.scenario_realistic
        if realistic_input is not None:
            realistic_value = economic_value(
                unit_value, realistic_input.volume, duration, realistic_input.efficiency
            )
        else:
            realistic_value = economic_value(unit_value, volume, duration)

        realistic_gain = realistic_value - total_cost
        realistic_roi = roi_percent(realistic_gain, total_cost)

        scenarios = {
            Scenario.PESSIMISTIC: self._scenario(
                Scenario.PESSIMISTIC, inputs.scenario_pessimistic,
                unit_value, duration, realistic_value, total_cost,
            ),
            Scenario.REALISTIC: build_scenario(
                SCENARIO_LABELS[Scenario.REALISTIC], realistic_value, total_cost
            ),
            Scenario.OPTIMISTIC: self._scenario(
                Scenario.OPTIMISTIC, inputs.scenario_optimistic,
                unit_value, duration, realistic_value, total_cost,
            ),
        }

        confidence = score_confidence(inputs.checklist_answers)
        risk = score_risk(inputs.risks)

        # Scale stage
        monthly_value = per_month(realistic_value, duration)
        annual_value = monthly_value * 12
        scale_cost = self._annual_scale_cost(costs, realistic_input, total_cost)
        cost_benefit = (
            (annual_value - scale_cost) / scale_cost if scale_cost > 0 else 0.0
        )

        score = innovation_score_pro(realistic_roi, confidence, risk)
        rollout = []
        if score >= ROLLOUT_THRESHOLD:
            rollout = project_rollout(annual_value, scale_cost)

        probability = success_probability_pro(realistic_roi, confidence, risk)

        return CalculatedMetrics(
            payback_period_months=round_half_up(safe_div(total_cost, monthly_value)),
            innovation_score=round_half_up(score),
            success_probability=round_half_up(probability),
            scenarios=scenarios,
            total_cost=round_half_up(total_cost),
            confidence_score=round_half_up(confidence),
            cost_benefit_ratio=round_half_up(cost_benefit),
            economic_value=round_half_up(realistic_value),
            economic_gain=round_half_up(realistic_gain),
            risk_score=round_half_up(risk),
            rollout_projections=rollout,
        )

    @staticmethod
    def _scenario(
        scenario: Scenario,
        scenario_input: Optional[ScenarioInput],
        unit_value: float,
        duration: float,
        realistic_value: float,
        total_cost: float,
    ) -> ScenarioMetrics:
        """Only the revenue side varies; every scenario shares the POC cost."""
        if scenario_input is not None:
            value = economic_value(
                unit_value, scenario_input.volume, duration, scenario_input.efficiency
            )
        else:
            value = realistic_value * SCENARIO_MULTIPLIERS[scenario]
        return build_scenario(SCENARIO_LABELS[scenario], value, total_cost)

    @staticmethod
    def _annual_scale_cost(
        costs: CostInputs,
        realistic_input: Optional[ScenarioInput],
        total_cost: float,
    ) -> float:
        if realistic_input is not None:
            return realistic_input.direct_cost * 12
        if costs.scale_duration_months:
            return per_month(total_cost, costs.duration_months) * 12
        return total_cost * FALLBACK_SCALE_COST_MULTIPLIER


_ENGINES: dict[ProjectMode, MetricsEngine] = {
    ProjectMode.STANDARD: StandardEngine(),
    ProjectMode.PRO: ProEngine(),
}


def get_engine(mode: ProjectMode) -> MetricsEngine:
    return _ENGINES[mode]


def compute_metrics(inputs: ProjectInputs) -> CalculatedMetrics:
    """Compute every metric for ``inputs``; never raises for valid input."""
    return get_engine(inputs.mode).calculate(inputs)
