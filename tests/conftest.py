"""Shared test fixtures for the Metria test suite."""

import pytest

from metria.config.settings import Settings
from metria.models.analysis import AIAnalysis
from metria.models.enums import ChecklistAnswer, ProjectMode, ValueType
from metria.models.inputs import CostInputs, OperationalMetrics, ProjectInputs
from metria.store import InMemoryRecordStore


def make_inputs(mode=ProjectMode.PRO, **overrides) -> ProjectInputs:
    """Cost-reduction POC: 20 saved per unit, 50 units a month over 3 months."""
    values = dict(
        mode=mode,
        project_name="Smart Routing POC",
        associated_company="TechCorp Solutions",
        value_type=ValueType.COST_REDUCTION,
        metrics=OperationalMetrics(
            current_unit_cost=100,
            new_unit_cost=80,
            volume_traded=50,
        ),
        costs=CostInputs(
            direct_cost=1000,
            labor_rate=50,
            labor_hours=10,
            duration_months=3,
        ),
    )
    values.update(overrides)
    return ProjectInputs(**values)


@pytest.fixture
def pro_inputs() -> ProjectInputs:
    """Reference Pro calculation: cost 2500, VE 3000, GE 500, ROI 20%."""
    return make_inputs()


@pytest.fixture
def standard_inputs() -> ProjectInputs:
    return make_inputs(mode=ProjectMode.STANDARD)


@pytest.fixture
def confident_inputs() -> ProjectInputs:
    """Pro inputs with a full "sim" checklist, which qualifies for rollout."""
    return make_inputs(checklist_answers=[ChecklistAnswer.SIM] * 8)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        admin_email="admin@metria.com",
        admin_password="admin-secret",
        anthropic_api_key="",
        analysis_timeout_seconds=5.0,
    )


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def sample_analysis() -> AIAnalysis:
    return AIAnalysis(
        strategic_analysis="Solid savings case with a short payback.",
        risk_assessment="Low execution risk.",
        market_viability="Viable within the current operation.",
        recommendations=["Expand volume.", "Negotiate license.", "Track unit cost."],
        market_fit_score=7.5,
    )
