from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from core.config import get_settings
from db.session import get_db
from services.waitlist import WaitlistService
from services.waitlist_store import InMemoryWaitlistStore, SqlWaitlistStore, WaitlistStore


@lru_cache(maxsize=1)
def get_memory_store() -> InMemoryWaitlistStore:
    return InMemoryWaitlistStore()


def get_waitlist_store(db: Session = Depends(get_db)) -> WaitlistStore:
    if get_settings().storage_backend == "memory":
        return get_memory_store()
    return SqlWaitlistStore(db)


def get_waitlist_service(store: WaitlistStore = Depends(get_waitlist_store)) -> WaitlistService:
    return WaitlistService(store)
