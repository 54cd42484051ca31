from __future__ import annotations

from abc import ABC, abstractmethod

from metria.engine.result import CalculatedMetrics
from metria.models.analysis import AIAnalysis
from metria.models.inputs import ProjectInputs


class AnalysisProvider(ABC):
    """Abstract base for qualitative analysis providers."""

    @abstractmethod
    async def analyze(self, inputs: ProjectInputs, metrics: CalculatedMetrics) -> AIAnalysis:
        """Return the analysis of a project, raising on any failure."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the provider is reachable and authenticated."""
        ...
