"""System prompt and formatter for the qualitative project analysis."""

from __future__ import annotations

from metria.engine.costs import aggregate_costs
from metria.engine.result import CalculatedMetrics
from metria.models.inputs import ProjectInputs

SYSTEM_PROMPT = """\
You are a senior innovation portfolio analyst reviewing a proposed \
innovation project (usually a proof of concept with a startup partner). \
You receive the project description and a set of deterministic financial \
metrics that were already calculated. Do not recalculate them; interpret them.

## Output
Reply with a single JSON object and nothing else, using exactly these keys:
- "strategic_analysis": string, 2-3 sentences
- "risk_assessment": string
- "market_viability": string
- "recommendations": array of exactly 3 short tactical strings
- "market_fit_score": number from 0 to 10

## Guidance
- Ground every statement in the numbers provided
- A negative economic gain or ROI is a red flag, say so plainly
- Recommendations must aim at raising the Innovation Score
- The market fit score reflects how coherent the numbers are with each other
"""


def _money(value: float) -> str:
    return f"R$ {value:,.2f}"


def format_analysis_prompt(
    inputs: ProjectInputs,
    metrics: CalculatedMetrics,
    language: str = "pt-BR",
) -> str:
    """Format the user prompt for one project."""
    realistic = metrics.realistic
    lines: list[str] = []

    lines.append("Analyze the following innovation project:\n")
    lines.append(f"Name: {inputs.project_name}")
    if inputs.associated_company:
        lines.append(f"Company: {inputs.associated_company}")
    if inputs.has_associated_startup and inputs.startup_name:
        lines.append(f"Startup partner: {inputs.startup_name}")
    lines.append(
        "Analysis model: "
        + ("Advanced methodology (Pro)" if inputs.is_pro else "Standard")
    )
    lines.append(f"Innovation Score: {metrics.innovation_score}/100")
    lines.append(f"Success probability: {metrics.success_probability}%")
    lines.append(f"ICV (confidence): {metrics.confidence_score}%")
    lines.append("")

    lines.append(f"Total cost (POC): {_money(metrics.total_cost)}")
    lines.append(f"Value type: {inputs.value_type.value}")
    lines.append(f"Economic value (VE): {_money(metrics.economic_value)}")
    lines.append(f"Economic gain (GE): {_money(metrics.economic_gain)}")

    if inputs.is_pro:
        costs = inputs.costs
        indirect = aggregate_costs(costs, inputs.mode).indirect
        lines.append(
            f"Project ROI: {realistic.roi}% ({realistic.roi / 100:.2f}x)"
        )
        lines.append(f"Cost-benefit at scale: {metrics.cost_benefit_ratio}x")
        lines.append(f"Risk score: {metrics.risk_score}/100")
        lines.append("")
        lines.append("Operational details:")
        lines.append(f"- Direct cost: {_money(costs.direct_cost)}")
        lines.append(f"- Indirect cost: {_money(indirect)}")
        lines.append(f"- Duration: {costs.duration_months:g} months")
        if inputs.problem_description:
            lines.append(f"- Problem: {inputs.problem_description}")
        if inputs.opportunity_description:
            lines.append(f"- Opportunity: {inputs.opportunity_description}")
    else:
        payback = (
            f"{metrics.payback_period_months} months"
            if metrics.payback_period_months > 0
            else "undefined / long term"
        )
        lines.append(f"Realistic ROI: {realistic.roi}%")
        lines.append(f"Payback: {payback}")
        if inputs.standard_goal:
            lines.append(f"Main goal: {inputs.standard_goal}")
        if inputs.standard_kpi:
            lines.append(f"Key indicator: {inputs.standard_kpi}")

    focus = (
        f"the cost x benefit relation and the value type ({inputs.value_type.value})"
        if inputs.is_pro
        else "whether the expected value covers the POC cost"
    )
    risk_focus = (
        "the economic viability (VE/GE) and the risk matrix"
        if inputs.is_pro
        else "the cost structure and the payback"
    )
    lines.append("")
    lines.append("Provide:")
    lines.append("1. A brief strategic analysis (2-3 sentences).")
    lines.append(f"2. The main risks, considering {risk_focus}.")
    lines.append(f"3. Market viability, focusing on {focus}.")
    lines.append("4. 3 tactical recommendations to raise the Innovation Score.")
    lines.append('5. A "Market Fit" score from 0 to 10 based on how coherent the numbers are.')
    lines.append("")
    lines.append(f"Write every text value in {language}.")

    return "\n".join(lines)
