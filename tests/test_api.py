"""Tests for FastAPI endpoints -- auth, metrics, reports, admin, health."""

import inspect
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi.routing import APIRoute
from httpx import ASGITransport, AsyncClient

from metria.main import create_app
from metria.providers.base import AnalysisProvider

PRO_PAYLOAD = {
    "mode": "pro",
    "project_name": "Smart Routing POC",
    "value_type": "cost_reduction",
    "metrics": {"current_unit_cost": 100, "new_unit_cost": 80, "volume_traded": 50},
    "costs": {"direct_cost": 1000, "labor_rate": 50, "labor_hours": 10, "duration_months": 3},
}


@pytest.fixture
def provider(sample_analysis):
    provider = MagicMock(spec=AnalysisProvider)
    provider.analyze = AsyncMock(return_value=sample_analysis)
    return provider


@pytest.fixture
def app(settings, store, provider):
    return create_app(settings, store=store, provider=provider)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _register(client, email="ana@acme.com", company="Metria HQ"):
    resp = await client.post("/api/auth/register", json={
        "name": "Ana", "email": email, "password": "s3cret", "company": company,
    })
    assert resp.status_code == 200
    return resp.json()


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def _admin_token(client) -> str:
    resp = await client.post("/api/auth/login", json={
        "email": "admin@metria.com", "password": "admin-secret",
    })
    assert resp.status_code == 200
    return resp.json()["token"]


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_cors_headers(self, client):
        resp = await client.options(
            "/health",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert resp.headers.get("access-control-allow-origin") == "http://localhost:3000"


class TestAuthEndpoints:
    @pytest.mark.asyncio
    async def test_register_and_me(self, client):
        body = await _register(client)
        assert body["user"]["email"] == "ana@acme.com"
        assert "password_hash" not in body["user"]

        resp = await client.get("/api/auth/me", headers=_auth(body["token"]))
        assert resp.status_code == 200
        assert resp.json()["name"] == "Ana"

    @pytest.mark.asyncio
    async def test_duplicate_email_is_409(self, client):
        await _register(client)
        resp = await client.post("/api/auth/register", json={
            "name": "Ana", "email": "ana@acme.com", "password": "x",
        })
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Email already registered."

    @pytest.mark.asyncio
    async def test_bad_login_is_401(self, client):
        await _register(client)
        resp = await client.post("/api/auth/login", json={
            "email": "ana@acme.com", "password": "wrong",
        })
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid credentials."

    @pytest.mark.asyncio
    async def test_me_without_token_is_401(self, client):
        resp = await client.get("/api/auth/me")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_logout(self, client):
        token = (await _register(client))["token"]
        resp = await client.post("/api/auth/logout", headers=_auth(token))
        assert resp.status_code == 200
        resp = await client.get("/api/auth/me", headers=_auth(token))
        assert resp.status_code == 401


class TestMetricsAndReports:
    @pytest.mark.asyncio
    async def test_preview_metrics(self, client, provider):
        token = (await _register(client))["token"]
        resp = await client.post("/api/metrics", json=PRO_PAYLOAD, headers=_auth(token))
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_cost"] == 2500
        assert data["economic_value"] == 3000
        assert data["scenarios"]["realistic"]["roi"] == 20.0
        provider.analyze.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_payload_is_422(self, client):
        token = (await _register(client))["token"]
        resp = await client.post(
            "/api/metrics", json={**PRO_PAYLOAD, "project_name": ""}, headers=_auth(token)
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_report_lifecycle(self, client):
        token = (await _register(client))["token"]

        resp = await client.post("/api/reports", json=PRO_PAYLOAD, headers=_auth(token))
        assert resp.status_code == 200
        report = resp.json()
        assert report["warnings"] == []
        assert report["analysis"]["market_fit_score"] == 7.5

        resp = await client.get("/api/reports", headers=_auth(token))
        assert [r["id"] for r in resp.json()] == [report["id"]]

        resp = await client.get(f"/api/reports/{report['id']}", headers=_auth(token))
        assert resp.status_code == 200
        assert resp.json()["metrics"]["economic_gain"] == 500

        resp = await client.delete(f"/api/reports/{report['id']}", headers=_auth(token))
        assert resp.status_code == 200
        resp = await client.get(f"/api/reports/{report['id']}", headers=_auth(token))
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_report_saved_with_fallback(self, client, provider):
        provider.analyze.side_effect = RuntimeError("provider down")
        token = (await _register(client))["token"]
        resp = await client.post("/api/reports", json=PRO_PAYLOAD, headers=_auth(token))
        assert resp.status_code == 200
        body = resp.json()
        assert body["analysis_fallback"] is True
        assert len(body["warnings"]) == 1

    @pytest.mark.asyncio
    async def test_reports_are_private(self, client):
        owner = (await _register(client))["token"]
        other = (await _register(client, email="bia@acme.com"))["token"]
        report = (await client.post("/api/reports", json=PRO_PAYLOAD, headers=_auth(owner))).json()

        resp = await client.get(f"/api/reports/{report['id']}", headers=_auth(other))
        assert resp.status_code == 404
        resp = await client.delete(f"/api/reports/{report['id']}", headers=_auth(other))
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_report_is_404(self, client):
        token = (await _register(client))["token"]
        resp = await client.get("/api/reports/nope", headers=_auth(token))
        assert resp.status_code == 404


class TestAdminEndpoints:
    @pytest.mark.asyncio
    async def test_non_admin_is_403(self, client):
        token = (await _register(client))["token"]
        resp = await client.get("/api/admin/overview", headers=_auth(token))
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_overview(self, client):
        user_token = (await _register(client))["token"]
        await client.post("/api/reports", json=PRO_PAYLOAD, headers=_auth(user_token))

        resp = await client.get("/api/admin/overview", headers=_auth(await _admin_token(client)))
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_users"] == 2
        assert data["total_projects"] == 1
        assert data["total_companies"] == 4
        assert data["top_companies"][0] == {"name": "Metria HQ", "projects": 1}

    @pytest.mark.asyncio
    async def test_company_crud(self, client):
        token = await _admin_token(client)

        resp = await client.post(
            "/api/admin/companies",
            json={"name": "Gamma", "industry": "Fintech"},
            headers=_auth(token),
        )
        assert resp.status_code == 200
        company = resp.json()
        assert company["status"] == "active"

        resp = await client.put(
            f"/api/admin/companies/{company['id']}",
            json={"name": "Gamma Labs"},
            headers=_auth(token),
        )
        assert resp.json()["name"] == "Gamma Labs"
        assert resp.json()["affected_users"] == 0

        resp = await client.delete(f"/api/admin/companies/{company['id']}", headers=_auth(token))
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_company_in_use_is_409(self, client):
        token = await _admin_token(client)
        # The admin account belongs to Metria HQ (comp-001)
        resp = await client.delete("/api/admin/companies/comp-001", headers=_auth(token))
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_company_is_404(self, client):
        token = await _admin_token(client)
        resp = await client.put(
            "/api/admin/companies/nope", json={"name": "X"}, headers=_auth(token)
        )
        assert resp.status_code == 404


class TestValueTypes:
    @pytest.mark.asyncio
    async def test_lists_value_types(self, client):
        resp = await client.get("/api/value-types")
        assert resp.status_code == 200
        entries = {e["value_type"]: e for e in resp.json()}
        assert len(entries) == 4
        assert entries["cost_reduction"]["label"] == "Cost Reduction"
        assert entries["cost_reduction"]["description"]


class TestBlockingEndpoints:
    BLOCKING_PATHS = {
        "/api/auth/register",
        "/api/auth/login",
        "/api/auth/logout",
        "/api/auth/me",
        "/api/reports",
        "/api/reports/{report_id}",
        "/api/admin/overview",
        "/api/admin/companies",
        "/api/admin/companies/{company_id}",
    }

    def test_store_and_hashing_routes_run_in_threadpool(self, app):
        routes = [r for r in app.routes if isinstance(r, APIRoute)]
        checked = 0
        for route in routes:
            if route.path not in self.BLOCKING_PATHS:
                continue
            if route.path == "/api/reports" and "POST" in route.methods:
                # Awaits the AI provider; persistence is offloaded inside
                continue
            assert not inspect.iscoroutinefunction(route.endpoint), route.path
            checked += 1
        assert checked >= len(self.BLOCKING_PATHS)
