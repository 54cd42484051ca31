"""Confidence, risk and summary scoring heuristics."""

from __future__ import annotations

from typing import Optional, Sequence

from metria.engine.numeric import clamp
from metria.models.enums import ChecklistAnswer, RiskLevel
from metria.models.inputs import NonEconomicRisks

# Points per checklist answer; 8 answers x 12.5 = 100.
_ANSWER_POINTS = {
    ChecklistAnswer.SIM: 12.5,
    ChecklistAnswer.PARCIAL: 6.25,
    ChecklistAnswer.NAO: 0.0,
}

UNKNOWN_CONFIDENCE = 50.0

_RISK_WEIGHTS = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}

ROLLOUT_THRESHOLD = 60.0


def score_confidence(answers: Optional[Sequence[ChecklistAnswer]]) -> float:
    """ICV score in [0, 100] from the confidence checklist.

    A missing checklist is "unknown confidence" and scores 50.
    """
    if answers is None:
        return UNKNOWN_CONFIDENCE
    return sum(_ANSWER_POINTS[answer] for answer in answers)


def score_risk(risks: Optional[NonEconomicRisks]) -> float:
    """Normalized risk score in [0, 100], higher is riskier.

    A missing risk matrix scores 0.
    """
    if risks is None:
        return 0.0
    levels = risks.levels()
    max_total = len(levels) * _RISK_WEIGHTS[RiskLevel.HIGH]
    total = sum(_RISK_WEIGHTS[level] for level in levels)
    return total / max_total * 100


def risk_bonus(risk_score: float) -> float:
    if risk_score < 30:
        return 20.0
    if risk_score < 60:
        return 10.0
    return 0.0


def innovation_score_pro(roi: float, confidence_score: float, risk_score: float) -> float:
    """ROI (capped at 200%) / 4 + ICV / 2 + risk bonus, capped at 100."""
    roi_points = clamp(roi, 0.0, 200.0) / 4
    score = roi_points + confidence_score / 2 + risk_bonus(risk_score)
    return clamp(score, 0.0, 100.0)


def success_probability_pro(roi: float, confidence_score: float, risk_score: float) -> float:
    """50 + 0.3 x ICV + 0.05 x ROI - 0.2 x risk, clamped to [10, 95]."""
    probability = 50 + confidence_score * 0.3 + roi * 0.05 - risk_score * 0.2
    return clamp(probability, 10.0, 95.0)


def innovation_score_standard(roi: float) -> float:
    """40 when ROI is not positive, 60 when it is, 80 above 100%."""
    score = 60.0 if roi > 0 else 40.0
    if roi > 100:
        score += 20.0
    return score
