"""Initial data for an empty store."""

from __future__ import annotations

import logging
import time
from typing import Optional

from metria.auth.passwords import hash_password
from metria.config.settings import Settings
from metria.models.enums import UserRole

from .record_store import COMPANIES, USERS, RecordStore

logger = logging.getLogger(__name__)

SEED_COMPANIES = [
    {"id": "comp-001", "name": "Metria HQ", "industry": "SaaS / Technology"},
    {"id": "comp-002", "name": "TechCorp Solutions", "industry": "IT Consulting"},
    {"id": "comp-003", "name": "Startup Lab", "industry": "Accelerator"},
    {"id": "comp-004", "name": "Varejo 4.0", "industry": "Retail"},
]


def _company_records() -> list[dict]:
    now_ms = int(time.time() * 1000)
    return [
        {**company, "status": "active", "created_at": now_ms}
        for company in SEED_COMPANIES
    ]


def seed_store(store: RecordStore, settings: Optional[Settings] = None) -> bool:
    """Populate an empty store with the seed companies and the admin account.

    Existing users are never touched. When users exist but the companies
    collection is missing, only the companies are created.
    Returns True when the full seed ran.
    """
    settings = settings or Settings()

    if store.get_all(USERS):
        if not store.has_collection(COMPANIES):
            logger.info("Companies collection missing, creating seed companies")
            for record in _company_records():
                store.add(COMPANIES, record)
        return False

    logger.info("Empty store detected, creating initial data")
    if not store.get_all(COMPANIES):
        for record in _company_records():
            store.add(COMPANIES, record)

    store.add(USERS, {
        "id": "admin-001",
        "name": "Metria Admin",
        "email": settings.admin_email.strip().lower(),
        "role": UserRole.ADMIN.value,
        "company": "Metria HQ",
        "job_title": "Platform Administrator",
        "avatar": "https://ui-avatars.com/api/?name=Metria+Admin&background=0f172a&color=fff",
        "password_hash": hash_password(settings.admin_password),
    })
    return True
