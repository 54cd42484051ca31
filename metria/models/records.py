"""Persisted domain records: users, companies and saved reports."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Optional

from metria.engine.result import CalculatedMetrics
from metria.models.analysis import AIAnalysis
from metria.models.enums import CompanyStatus, UserRole
from metria.models.inputs import ProjectInputs


@dataclass
class User:
    """A platform user. The password hash lives only in the store record."""

    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER
    company: Optional[str] = None
    avatar: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        record["role"] = self.role.value
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> User:
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in record.items() if k in known}
        values["role"] = UserRole(values.get("role", UserRole.USER.value))
        return cls(**values)


@dataclass
class Company:
    id: str
    name: str
    industry: str
    status: CompanyStatus = CompanyStatus.ACTIVE
    created_at: int = 0

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        record["status"] = self.status.value
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Company:
        return cls(
            id=record["id"],
            name=record["name"],
            industry=record.get("industry", ""),
            status=CompanyStatus(record.get("status", CompanyStatus.ACTIVE.value)),
            created_at=record.get("created_at", 0),
        )


@dataclass
class SavedReport:
    """A calculation persisted in a user's history."""

    id: str
    user_id: str
    created_at: int
    data: ProjectInputs
    metrics: CalculatedMetrics
    analysis: Optional[AIAnalysis] = None
    analysis_fallback: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "data": self.data.model_dump(mode="json"),
            "metrics": self.metrics.to_dict(),
            "analysis": self.analysis.model_dump(mode="json") if self.analysis else None,
            "analysis_fallback": self.analysis_fallback,
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> SavedReport:
        analysis = record.get("analysis")
        return cls(
            id=record["id"],
            user_id=record["user_id"],
            created_at=record["created_at"],
            data=ProjectInputs.model_validate(record["data"]),
            metrics=CalculatedMetrics.from_dict(record["metrics"]),
            analysis=AIAnalysis.model_validate(analysis) if analysis else None,
            analysis_fallback=record.get("analysis_fallback", False),
            warnings=list(record.get("warnings", [])),
        )
