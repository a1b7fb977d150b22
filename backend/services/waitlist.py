from __future__ import annotations

import logging
from typing import Any

from core.exceptions import DuplicateEmailError, EmailConflictError
from schemas.waitlist import StoredWaitlistEntry, validate_waitlist_entry
from services.waitlist_store import WaitlistStore

logger = logging.getLogger(__name__)


class WaitlistService:
    def __init__(self, store: WaitlistStore):
        self.store = store

    def get_waitlist_count(self) -> int:
        return self.store.count_entries()

    def join_waitlist(self, raw: Any) -> StoredWaitlistEntry:
        """Validate ``raw``, reject known emails, then persist the entry.

        Raises ``WaitlistValidationError``, ``DuplicateEmailError`` or ``StorageError``.
        The lookup before the insert only gives a friendlier answer; the store's
        unique constraint decides when two requests race on the same email.
        """
        data = validate_waitlist_entry(raw)

        if self.store.find_entry_by_email(data.email) is not None:
            raise DuplicateEmailError(data.email)

        try:
            return self.store.create_entry(data)
        except EmailConflictError as exc:
            logger.info("Concurrent signup for an existing waitlist email")
            raise DuplicateEmailError(data.email) from exc
