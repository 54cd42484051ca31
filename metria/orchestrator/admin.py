"""Admin usage metrics and company management."""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from metria.engine.numeric import round_half_up, safe_div
from metria.models.enums import CompanyStatus
from metria.models.records import Company, User
from metria.store.record_store import COMPANIES, REPORTS, USERS, RecordStore

from .errors import CompanyInUseError, CompanyNotFoundError

logger = logging.getLogger(__name__)

TOP_COMPANIES = 10


@dataclass(frozen=True)
class UserUsage:
    user: User
    project_count: int


@dataclass(frozen=True)
class CompanyUsage:
    company: Company
    user_count: int
    project_count: int


@dataclass(frozen=True)
class UsageOverview:
    total_users: int
    total_projects: int
    total_companies: int
    avg_projects_per_user: float
    users: list[UserUsage] = field(default_factory=list)
    companies: list[CompanyUsage] = field(default_factory=list)
    top_companies: list[CompanyUsage] = field(default_factory=list)


class AdminService:
    """Aggregates users, companies and reports for the admin panel."""

    def __init__(self, store: RecordStore):
        self._store = store

    def usage_overview(self) -> UsageOverview:
        users = [User.from_record(r) for r in self._store.get_all(USERS)]
        companies = [Company.from_record(r) for r in self._store.get_all(COMPANIES)]
        reports = self._store.get_all(REPORTS)

        projects_by_user = Counter(r.get("user_id") for r in reports)

        user_usage = sorted(
            (UserUsage(user=u, project_count=projects_by_user[u.id]) for u in users),
            key=lambda u: u.project_count,
            reverse=True,
        )

        company_usage: list[CompanyUsage] = []
        for company in companies:
            members = [u for u in users if u.company == company.name]
            company_usage.append(
                CompanyUsage(
                    company=company,
                    user_count=len(members),
                    project_count=sum(projects_by_user[u.id] for u in members),
                )
            )

        top = sorted(company_usage, key=lambda c: c.project_count, reverse=True)

        return UsageOverview(
            total_users=len(users),
            total_projects=len(reports),
            total_companies=len(companies),
            avg_projects_per_user=round_half_up(safe_div(len(reports), len(users)), 1),
            users=user_usage,
            companies=company_usage,
            top_companies=top[:TOP_COMPANIES],
        )

    def list_companies(self) -> list[Company]:
        return [Company.from_record(r) for r in self._store.get_all(COMPANIES)]

    def create_company(
        self,
        name: str,
        industry: str,
        status: CompanyStatus = CompanyStatus.ACTIVE,
    ) -> Company:
        company = Company(
            id=str(uuid4()),
            name=name,
            industry=industry,
            status=status,
            created_at=int(time.time() * 1000),
        )
        self._store.add(COMPANIES, company.to_record())
        return company

    def update_company(
        self,
        company_id: str,
        name: Optional[str] = None,
        industry: Optional[str] = None,
        status: Optional[CompanyStatus] = None,
    ) -> tuple[Company, int]:
        """Update a company; a rename is carried over to its users.

        Returns the updated company and the number of users moved to the new name.
        """
        record = self._store.get(COMPANIES, company_id)
        if record is None:
            raise CompanyNotFoundError(company_id)
        current = Company.from_record(record)

        updated = Company(
            id=current.id,
            name=name if name is not None else current.name,
            industry=industry if industry is not None else current.industry,
            status=status if status is not None else current.status,
            created_at=current.created_at,
        )
        self._store.update(COMPANIES, updated.to_record())

        affected = 0
        if updated.name != current.name:
            for user_record in self._store.find_by_field(USERS, "company", current.name):
                self._store.update(USERS, {"id": user_record["id"], "company": updated.name})
                affected += 1
            if affected:
                logger.info(f"Moved {affected} users from '{current.name}' to '{updated.name}'")

        return updated, affected

    def delete_company(self, company_id: str) -> None:
        record = self._store.get(COMPANIES, company_id)
        if record is None:
            raise CompanyNotFoundError(company_id)
        user_count = len(self._store.find_by_field(USERS, "company", record["name"]))
        if user_count > 0:
            raise CompanyInUseError(company_id, user_count)
        self._store.delete(COMPANIES, company_id)
