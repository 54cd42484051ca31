"""Qualitative analysis returned by the AI collaborator."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AIAnalysis(BaseModel):
    """Fixed-shape qualitative analysis of a project."""

    strategic_analysis: str
    risk_assessment: str
    market_viability: str
    recommendations: list[str] = Field(default_factory=list)
    market_fit_score: float = Field(ge=0, le=10)


FALLBACK_ANALYSIS = AIAnalysis(
    strategic_analysis=(
        "The detailed analysis could not be generated right now. "
        "Check the AI provider configuration."
    ),
    risk_assessment="Risk estimated from the standard heuristics only.",
    market_viability="Market viability analysis is unavailable offline.",
    recommendations=[
        "Review the cost structure.",
        "Validate the value proposition.",
        "Monitor execution closely.",
    ],
    market_fit_score=5,
)
