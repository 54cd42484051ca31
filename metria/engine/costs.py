"""POC cost aggregation."""

from __future__ import annotations

from dataclasses import dataclass

from metria.models.enums import ProjectMode
from metria.models.inputs import CostInputs


@dataclass(frozen=True)
class CostBreakdown:
    direct: float
    indirect: float

    @property
    def total(self) -> float:
        return self.direct + self.indirect


def aggregate_pro_costs(costs: CostInputs) -> CostBreakdown:
    """Direct line items plus labor and other monthly expenses over the POC."""
    direct = (
        costs.direct_cost
        + costs.fees
        + costs.licenses
        + costs.external_services
        + costs.infrastructure
    )
    labor_monthly = costs.labor_rate * costs.labor_hours
    indirect = (labor_monthly * costs.duration_months) + (
        costs.other_expenses * costs.duration_months
    )
    return CostBreakdown(direct=direct, indirect=indirect)


def aggregate_standard_costs(costs: CostInputs) -> CostBreakdown:
    """Direct cost and fees plus labor over the POC."""
    direct = costs.direct_cost + costs.fees
    indirect = costs.labor_rate * costs.labor_hours * costs.duration_months
    return CostBreakdown(direct=direct, indirect=indirect)


def aggregate_costs(costs: CostInputs, mode: ProjectMode) -> CostBreakdown:
    if mode is ProjectMode.PRO:
        return aggregate_pro_costs(costs)
    return aggregate_standard_costs(costs)
