"""Report orchestrator -- compute, analyze and persist a project report."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from metria.engine import CalculatedMetrics, compute_metrics
from metria.models.analysis import FALLBACK_ANALYSIS, AIAnalysis
from metria.models.inputs import ProjectInputs
from metria.models.records import SavedReport, User
from metria.providers.base import AnalysisProvider
from metria.store.record_store import REPORTS, RecordStore

from .errors import ReportNotFoundError

logger = logging.getLogger(__name__)

ANALYSIS_FALLBACK_WARNING = (
    "AI analysis unavailable. The report was generated with the basic analysis."
)


@dataclass
class SubmissionResult:
    report: SavedReport
    warnings: list[str] = field(default_factory=list)


class ReportOrchestrator:
    """Coordinates one form submission.

    Flow:
    - Deterministic metrics are computed first.
    - The AI provider is called once; any failure is replaced by the fixed
      fallback analysis and reported as a non-fatal warning.
    - The report is always persisted.
    """

    def __init__(self, store: RecordStore, provider: Optional[AnalysisProvider] = None):
        self._store = store
        self._provider = provider

    def preview(self, inputs: ProjectInputs) -> CalculatedMetrics:
        """Compute metrics without calling the AI or saving anything."""
        return compute_metrics(inputs)

    async def submit(self, user: User, inputs: ProjectInputs) -> SubmissionResult:
        metrics = compute_metrics(inputs)
        analysis, used_fallback = await self._analyze(inputs, metrics)

        warnings: list[str] = []
        if used_fallback:
            warnings.append(ANALYSIS_FALLBACK_WARNING)

        report = SavedReport(
            id=str(uuid4()),
            user_id=user.id,
            created_at=int(time.time() * 1000),
            data=inputs,
            metrics=metrics,
            analysis=analysis,
            analysis_fallback=used_fallback,
            warnings=warnings,
        )
        await asyncio.to_thread(self._store.add, REPORTS, report.to_record())
        logger.info(f"Saved report {report.id} for user {user.id}")

        return SubmissionResult(report=report, warnings=warnings)

    async def _analyze(
        self, inputs: ProjectInputs, metrics: CalculatedMetrics
    ) -> tuple[AIAnalysis, bool]:
        if self._provider is None:
            return FALLBACK_ANALYSIS, True
        try:
            return await self._provider.analyze(inputs, metrics), False
        except Exception as e:
            logger.warning(f"AI analysis failed, using fallback: {e!r}")
            return FALLBACK_ANALYSIS, True

    def list_reports(self, user_id: str) -> list[SavedReport]:
        """Reports of one user, newest first."""
        records = self._store.find_by_field(REPORTS, "user_id", user_id)
        reports = [SavedReport.from_record(r) for r in records]
        return sorted(reports, key=lambda r: r.created_at, reverse=True)

    def get_report(self, report_id: str) -> SavedReport:
        record = self._store.get(REPORTS, report_id)
        if record is None:
            raise ReportNotFoundError(report_id)
        return SavedReport.from_record(record)

    def delete_report(self, user_id: str, report_id: str) -> bool:
        """Delete a report owned by ``user_id``; False when not theirs or missing."""
        record = self._store.get(REPORTS, report_id)
        if record is None or record.get("user_id") != user_id:
            return False
        return self._store.delete(REPORTS, report_id)
