from .admin import AdminService, CompanyUsage, UsageOverview, UserUsage
from .errors import CompanyInUseError, CompanyNotFoundError, ReportNotFoundError
from .report_orchestrator import (
    ANALYSIS_FALLBACK_WARNING,
    ReportOrchestrator,
    SubmissionResult,
)

__all__ = [
    "ReportOrchestrator",
    "SubmissionResult",
    "ANALYSIS_FALLBACK_WARNING",
    "AdminService",
    "UsageOverview",
    "UserUsage",
    "CompanyUsage",
    "ReportNotFoundError",
    "CompanyNotFoundError",
    "CompanyInUseError",
]
