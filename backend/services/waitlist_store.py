from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import EmailConflictError, StorageError
from models import WaitlistEntry
from schemas.waitlist import StoredWaitlistEntry, WaitlistEntryCreate

logger = logging.getLogger(__name__)


class WaitlistStore(Protocol):
    def count_entries(self) -> int: ...

    def find_entry_by_email(self, email: str) -> StoredWaitlistEntry | None: ...

    def create_entry(self, data: WaitlistEntryCreate) -> StoredWaitlistEntry: ...


class SqlWaitlistStore:
    """Waitlist persistence on a SQLAlchemy session.

    Every SQLAlchemy failure is rolled back and re-raised as ``StorageError``;
    a unique violation on ``email`` becomes ``EmailConflictError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def count_entries(self) -> int:
        try:
            return self.db.scalar(select(func.count()).select_from(WaitlistEntry)) or 0
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to count waitlist entries") from exc

    def find_entry_by_email(self, email: str) -> StoredWaitlistEntry | None:
        try:
            row = self.db.scalar(select(WaitlistEntry).where(WaitlistEntry.email == email))
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to look up waitlist entry") from exc
        if row is None:
            return None
        return StoredWaitlistEntry.model_validate(row)

    def create_entry(self, data: WaitlistEntryCreate) -> StoredWaitlistEntry:
        row = WaitlistEntry(full_name=data.full_name, email=data.email, company=data.company)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except IntegrityError as exc:
            self.db.rollback()
            raise EmailConflictError(f"Waitlist entry for {data.email} already exists") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Failed to create waitlist entry") from exc

        logger.info("Created waitlist entry %s", row.id)
        return StoredWaitlistEntry.model_validate(row)


class InMemoryWaitlistStore:
    """Process-local store keyed by email. Used for local runs and tests."""

    def __init__(self) -> None:
        self._entries: dict[str, StoredWaitlistEntry] = {}
        self._lock = threading.Lock()

    def count_entries(self) -> int:
        with self._lock:
            return len(self._entries)

    def find_entry_by_email(self, email: str) -> StoredWaitlistEntry | None:
        with self._lock:
            return self._entries.get(email)

    def create_entry(self, data: WaitlistEntryCreate) -> StoredWaitlistEntry:
        entry = StoredWaitlistEntry(
            id=uuid.uuid4(),
            full_name=data.full_name,
            email=data.email,
            company=data.company,
            created_at=datetime.now(tz=timezone.utc),
        )
        with self._lock:
            if data.email in self._entries:
                raise EmailConflictError(f"Waitlist entry for {data.email} already exists")
            self._entries[data.email] = entry
        return entry
