from .record_store import (
    COMPANIES,
    REPORTS,
    SESSIONS,
    USERS,
    InMemoryRecordStore,
    JsonFileRecordStore,
    RecordStore,
    create_store,
)
from .seed import seed_store

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "create_store",
    "seed_store",
    "USERS",
    "COMPANIES",
    "REPORTS",
    "SESSIONS",
]
