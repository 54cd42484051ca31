"""Five-year rollout projection for qualifying projects."""

from __future__ import annotations

from metria.engine.numeric import round_half_up
from metria.engine.result import RolloutYear

ROLLOUT_YEARS = 5
REVENUE_GROWTH = 0.15
COST_INFLATION = 0.05


def project_rollout(
    annual_revenue: float,
    annual_cost: float,
    years: int = ROLLOUT_YEARS,
) -> list[RolloutYear]:
    """Project revenue, cost and profit year by year.

    Revenue grows linearly by 15% of the base per year and cost by 5%.
    Accumulated profit is the running sum of the reported (rounded) profits.
    """
    projections: list[RolloutYear] = []
    accumulated = 0.0

    for year in range(1, years + 1):
        revenue = annual_revenue * (1 + REVENUE_GROWTH * (year - 1))
        cost = annual_cost * (1 + COST_INFLATION * (year - 1))
        profit = round_half_up(revenue - cost)
        accumulated += profit
        projections.append(
            RolloutYear(
                year=year,
                revenue=round_half_up(revenue),
                cost=round_half_up(cost),
                profit=profit,
                accumulated_profit=round_half_up(accumulated),
            )
        )

    return projections
