"""Pydantic models for the project form.

One ``ProjectInputs`` instance is built at the form boundary and handed to
the metrics engine unchanged. Numeric fields default to 0 so a partially
filled form still computes; negative values are accepted and propagate
arithmetically.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from metria.models.enums import (
    ChecklistAnswer,
    InitiativeType,
    InnovationHorizon,
    ProjectMode,
    RiskLevel,
    StageGate,
    ValueType,
)

CHECKLIST_LENGTH = 8


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class OperationalMetrics(_FrozenModel):
    """Operational data behind the economic value (section 2 of the form)."""

    # Cost reduction
    current_unit_cost: float = 0.0
    new_unit_cost: float = 0.0
    volume_traded: float = 0.0

    # Revenue increase
    ticket_price: float = 0.0
    new_ticket_price: float = 0.0
    additional_sales: float = 0.0
    conversion_rate: Optional[float] = None

    # New revenue
    product_price: float = 0.0
    sales_volume: float = 0.0
    purchase_frequency: Optional[float] = None
    channel: Optional[str] = None

    # Cost avoidance
    future_predictable_cost: float = 0.0
    avoidance_probability: Optional[float] = Field(default=None, ge=0, le=100)
    predictor_indicator: Optional[str] = None
    frequency: Optional[float] = None


class CostInputs(_FrozenModel):
    """POC cost line items (section 3 of the form)."""

    direct_cost: float = Field(default=0.0, description="Startup / solution cost")
    fees: float = 0.0
    licenses: float = 0.0
    external_services: float = 0.0
    infrastructure: float = 0.0
    labor_rate: float = Field(default=0.0, description="Team hourly rate")
    labor_hours: float = Field(default=0.0, description="Dedicated hours per month")
    team_size: Optional[int] = None
    other_expenses: float = Field(default=0.0, description="Other monthly expenses")
    duration_months: float = Field(default=1.0, description="POC duration")
    scale_duration_months: Optional[float] = Field(
        default=None, description="Implementation time of the scale phase"
    )


class ScenarioInput(_FrozenModel):
    """Explicit scenario assumptions (section 5 of the form)."""

    direct_cost: float = 0.0
    volume: float = 0.0
    efficiency: float = Field(default=1.0, description="Multiplier, e.g. 0.9 or 1.1")


class NonEconomicRisks(_FrozenModel):
    """Ten qualitative risk dimensions rated low / medium / high."""

    strategic_alignment: RiskLevel = RiskLevel.LOW
    reputational_risk: RiskLevel = RiskLevel.LOW
    technical_incompatibility: RiskLevel = RiskLevel.LOW
    startup_maturity: RiskLevel = RiskLevel.LOW
    legal_barriers: RiskLevel = RiskLevel.LOW
    esg_impact: RiskLevel = RiskLevel.LOW
    it_priority: RiskLevel = RiskLevel.LOW
    hr_availability: RiskLevel = RiskLevel.LOW
    stakeholder_support: RiskLevel = RiskLevel.LOW
    execution_risk: RiskLevel = RiskLevel.LOW

    def levels(self) -> list[RiskLevel]:
        return [getattr(self, name) for name in type(self).model_fields]


class StandardRisks(_FrozenModel):
    """Light yes/no risk flags of the Standard form."""

    it_dependency: bool = False
    lack_of_data: bool = False
    low_startup_capacity: bool = False
    lack_of_budget: bool = False
    internal_resistance: bool = False


class ProjectInputs(_FrozenModel):
    """Everything the user submits for one calculation."""

    mode: ProjectMode = ProjectMode.STANDARD
    project_name: str = Field(min_length=1)
    associated_company: str = ""
    value_type: ValueType = ValueType.COST_REDUCTION

    # Partner startup
    has_associated_startup: bool = False
    startup_name: Optional[str] = None
    startup_cnpj: Optional[str] = None

    # General data
    department: Optional[str] = None
    project_owner: Optional[str] = None
    stakeholders: Optional[str] = None
    initiative_type: Optional[InitiativeType] = None
    stage_gate: Optional[StageGate] = None
    innovation_thesis: Optional[str] = None
    strategic_objective: Optional[str] = None
    problem_description: Optional[str] = None
    opportunity_description: Optional[str] = None

    metrics: OperationalMetrics = Field(default_factory=OperationalMetrics)
    costs: CostInputs = Field(default_factory=CostInputs)

    # Assumptions
    monthly_volume_predictable: Optional[float] = None
    seasonality: Optional[str] = None
    usage_frequency: Optional[str] = None
    operational_constraints: Optional[str] = None
    critical_dependencies: Optional[str] = None

    # Scenarios (Pro)
    scenario_pessimistic: Optional[ScenarioInput] = None
    scenario_realistic: Optional[ScenarioInput] = None
    scenario_optimistic: Optional[ScenarioInput] = None

    # Confidence checklist and risk matrix (Pro)
    checklist_answers: Optional[list[ChecklistAnswer]] = Field(
        default=None, min_length=CHECKLIST_LENGTH, max_length=CHECKLIST_LENGTH
    )
    risks: Optional[NonEconomicRisks] = None

    # Portfolio data (Pro)
    innovation_horizon: Optional[InnovationHorizon] = None
    thesis_alignment: Optional[str] = None
    customer_impact: Optional[str] = None
    internal_impact: Optional[str] = None
    solution_complexity: Optional[RiskLevel] = None
    uncertainty_degree: Optional[RiskLevel] = None

    # Standard-only descriptive fields
    standard_goal: Optional[str] = None
    standard_kpi: Optional[str] = None
    standard_impact: Optional[str] = None
    standard_risks: Optional[StandardRisks] = None
    observations: Optional[str] = None

    @property
    def is_pro(self) -> bool:
        return self.mode is ProjectMode.PRO
