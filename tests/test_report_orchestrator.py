"""Tests for ReportOrchestrator -- the AI provider is always mocked."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from metria.models.analysis import FALLBACK_ANALYSIS
from metria.models.records import User
from metria.orchestrator import (
    ANALYSIS_FALLBACK_WARNING,
    ReportNotFoundError,
    ReportOrchestrator,
)
from metria.providers.base import AnalysisProvider
from metria.store import REPORTS


@pytest.fixture
def user():
    return User(id="u1", name="Ana", email="ana@acme.com", company="Acme")


def _provider(**kwargs) -> MagicMock:
    provider = MagicMock(spec=AnalysisProvider)
    provider.analyze = AsyncMock(**kwargs)
    return provider


class TestSubmit:
    @pytest.mark.asyncio
    async def test_submit_with_analysis(self, store, user, pro_inputs, sample_analysis):
        provider = _provider(return_value=sample_analysis)
        orchestrator = ReportOrchestrator(store, provider)

        result = await orchestrator.submit(user, pro_inputs)

        provider.analyze.assert_awaited_once()
        assert result.warnings == []
        assert result.report.analysis == sample_analysis
        assert result.report.analysis_fallback is False
        assert result.report.metrics.total_cost == 2500
        assert store.get(REPORTS, result.report.id)["user_id"] == "u1"

    @pytest.mark.asyncio
    async def test_provider_failure_uses_fallback(self, store, user, pro_inputs):
        provider = _provider(side_effect=RuntimeError("quota exceeded"))
        orchestrator = ReportOrchestrator(store, provider)

        result = await orchestrator.submit(user, pro_inputs)

        assert result.warnings == [ANALYSIS_FALLBACK_WARNING]
        assert result.report.analysis == FALLBACK_ANALYSIS
        assert result.report.analysis_fallback is True
        # Still persisted
        saved = orchestrator.get_report(result.report.id)
        assert saved.analysis_fallback is True
        assert saved.warnings == [ANALYSIS_FALLBACK_WARNING]

    @pytest.mark.asyncio
    async def test_timeout_uses_fallback(self, store, user, pro_inputs):
        provider = _provider(side_effect=TimeoutError())
        result = await ReportOrchestrator(store, provider).submit(user, pro_inputs)
        assert result.report.analysis_fallback is True

    @pytest.mark.asyncio
    async def test_no_provider_uses_fallback(self, store, user, standard_inputs):
        result = await ReportOrchestrator(store).submit(user, standard_inputs)
        assert result.report.analysis == FALLBACK_ANALYSIS
        assert result.warnings == [ANALYSIS_FALLBACK_WARNING]


class TestPreview:
    def test_preview_does_not_persist(self, store, pro_inputs):
        provider = _provider()
        metrics = ReportOrchestrator(store, provider).preview(pro_inputs)
        assert metrics.economic_value == 3000
        provider.analyze.assert_not_called()
        assert store.get_all(REPORTS) == []


class TestHistory:
    @pytest.mark.asyncio
    async def test_list_reports_newest_first(self, store, user, pro_inputs, sample_analysis):
        orchestrator = ReportOrchestrator(store, _provider(return_value=sample_analysis))
        first = await orchestrator.submit(user, pro_inputs)
        second = await orchestrator.submit(user, pro_inputs)
        store.update(REPORTS, {"id": first.report.id, "created_at": 1})
        store.update(REPORTS, {"id": second.report.id, "created_at": 2})

        reports = orchestrator.list_reports("u1")
        assert [r.id for r in reports] == [second.report.id, first.report.id]
        assert orchestrator.list_reports("someone-else") == []

    def test_get_missing_report(self, store):
        with pytest.raises(ReportNotFoundError):
            ReportOrchestrator(store).get_report("missing")

    @pytest.mark.asyncio
    async def test_delete_only_own_report(self, store, user, pro_inputs):
        orchestrator = ReportOrchestrator(store)
        result = await orchestrator.submit(user, pro_inputs)

        assert orchestrator.delete_report("intruder", result.report.id) is False
        assert orchestrator.delete_report("u1", result.report.id) is True
        assert orchestrator.delete_report("u1", result.report.id) is False
