"""FastAPI application for Metria: auth, metrics, reports and admin endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from metria.auth import AuthService, DuplicateEmailError, InvalidCredentialsError
from metria.config.settings import Settings
from metria.engine.value_types import get_all_value_types
from metria.models.enums import CompanyStatus
from metria.models.inputs import ProjectInputs
from metria.models.records import User
from metria.orchestrator import (
    AdminService,
    CompanyInUseError,
    CompanyNotFoundError,
    ReportNotFoundError,
    ReportOrchestrator,
    UsageOverview,
)
from metria.providers import AnalysisProvider, ClaudeAnalysisProvider
from metria.store import RecordStore, create_store, seed_store

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    company: Optional[str] = None
    avatar: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class CompanyRequest(BaseModel):
    name: str
    industry: str
    status: CompanyStatus = CompanyStatus.ACTIVE


class CompanyUpdateRequest(BaseModel):
    name: Optional[str] = None
    industry: Optional[str] = None
    status: Optional[CompanyStatus] = None


def _session_response(session) -> dict[str, Any]:
    return {"user": session.user.to_record(), "token": session.token}


def _overview_to_dict(overview: UsageOverview) -> dict[str, Any]:
    def company_entry(usage) -> dict[str, Any]:
        return {
            **usage.company.to_record(),
            "user_count": usage.user_count,
            "project_count": usage.project_count,
        }

    return {
        "total_users": overview.total_users,
        "total_projects": overview.total_projects,
        "total_companies": overview.total_companies,
        "avg_projects_per_user": overview.avg_projects_per_user,
        "users": [
            {**u.user.to_record(), "project_count": u.project_count}
            for u in overview.users
        ],
        "companies": [company_entry(c) for c in overview.companies],
        "top_companies": [
            {"name": c.company.name, "projects": c.project_count}
            for c in overview.top_companies
        ],
    }


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    provider: Optional[AnalysisProvider] = None,
) -> FastAPI:
    """Build the application with explicit store and AI provider dependencies."""
    app_settings = app_settings or settings
    store = store if store is not None else create_store(app_settings.store_path)
    seed_store(store, app_settings)
    if provider is None:
        provider = ClaudeAnalysisProvider(settings=app_settings)

    auth_service = AuthService(store)
    orchestrator = ReportOrchestrator(store, provider)
    admin_service = AdminService(store)

    app = FastAPI(title="Metria API", version="0.1.0")
    app.state.store = store
    app.state.auth = auth_service
    app.state.orchestrator = orchestrator
    app.state.admin = admin_service
    logger.info(f"Metria API configured with {type(store).__name__}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DuplicateEmailError)
    async def duplicate_email_handler(request: Request, exc: DuplicateEmailError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(ReportNotFoundError)
    @app.exception_handler(CompanyNotFoundError)
    async def not_found_handler(request: Request, exc: Exception):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(CompanyInUseError)
    async def company_in_use_handler(request: Request, exc: CompanyInUseError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    def current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    ) -> User:
        token = credentials.credentials if credentials else None
        user = auth_service.get_session(token)
        if user is None:
            raise HTTPException(status_code=401, detail="Not authenticated.")
        return user

    def admin_user(user: User = Depends(current_user)) -> User:
        if not user.is_admin:
            raise HTTPException(status_code=403, detail="Admin access required.")
        return user

    # --- Auth ---------------------------------------------------------------

    @app.post("/api/auth/register")
    def register(body: RegisterRequest):
        """Create an account and return its session."""
        profile = body.model_dump(exclude={"password"})
        session = auth_service.register(profile, body.password)
        return _session_response(session)

    @app.post("/api/auth/login")
    def login(body: LoginRequest):
        session = auth_service.login(body.email, body.password)
        return _session_response(session)

    @app.post("/api/auth/logout")
    def logout(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    ):
        if credentials:
            auth_service.logout(credentials.credentials)
        return {"status": "ok"}

    @app.get("/api/auth/me")
    def me(user: User = Depends(current_user)):
        return user.to_record()

    # --- Metrics and reports -------------------------------------------------

    @app.get("/api/value-types")
    async def value_types():
        """Value types the form can offer, with their display text."""
        return [
            {
                "value_type": definition.value_type.value,
                "label": definition.label,
                "description": definition.description,
            }
            for definition in get_all_value_types().values()
        ]

    @app.post("/api/metrics")
    def preview_metrics(inputs: ProjectInputs, user: User = Depends(current_user)):
        """Compute metrics without saving a report (no AI call)."""
        return orchestrator.preview(inputs).to_dict()

    @app.post("/api/reports")
    async def create_report(inputs: ProjectInputs, user: User = Depends(current_user)):
        """Compute, analyze and save a report to the user's history."""
        result = await orchestrator.submit(user, inputs)
        return {**result.report.to_record(), "warnings": result.warnings}

    @app.get("/api/reports")
    def list_reports(user: User = Depends(current_user)):
        return [r.to_record() for r in orchestrator.list_reports(user.id)]

    @app.get("/api/reports/{report_id}")
    def get_report(report_id: str, user: User = Depends(current_user)):
        report = orchestrator.get_report(report_id)
        if report.user_id != user.id and not user.is_admin:
            raise ReportNotFoundError(report_id)
        return report.to_record()

    @app.delete("/api/reports/{report_id}")
    def delete_report(report_id: str, user: User = Depends(current_user)):
        if not orchestrator.delete_report(user.id, report_id):
            raise ReportNotFoundError(report_id)
        return {"status": "deleted"}

    # --- Admin ---------------------------------------------------------------

    @app.get("/api/admin/overview")
    def admin_overview(user: User = Depends(admin_user)):
        """Aggregate usage metrics across users and companies."""
        return _overview_to_dict(admin_service.usage_overview())

    @app.post("/api/admin/companies")
    def create_company(body: CompanyRequest, user: User = Depends(admin_user)):
        company = admin_service.create_company(body.name, body.industry, body.status)
        return company.to_record()

    @app.put("/api/admin/companies/{company_id}")
    def update_company(
        company_id: str,
        body: CompanyUpdateRequest,
        user: User = Depends(admin_user),
    ):
        company, affected = admin_service.update_company(
            company_id, name=body.name, industry=body.industry, status=body.status
        )
        return {**company.to_record(), "affected_users": affected}

    @app.delete("/api/admin/companies/{company_id}")
    def delete_company(company_id: str, user: User = Depends(admin_user)):
        admin_service.delete_company(company_id)
        return {"status": "deleted"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("metria.main:app", host="0.0.0.0", port=8000)
