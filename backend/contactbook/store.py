"""
Contactbook API — In-Memory Contact Store
===========================================

What:  The process-lifetime, append-only collection of contacts, plus the
       FastAPI dependency that hands it to route handlers.
How:   `ContactStore` owns an ordered list and a single asyncio.Lock that
       serializes every read and append. One store is created per
       application by `create_app()` and kept on `app.state`.
When:  Seeded at construction; grows by one record per successful create;
       never shrinks and never mutates an existing record.

Nothing is persisted: a restart yields a freshly seeded store.
"""

import asyncio
import logging
from typing import Iterable, List, Optional

from fastapi import Request

from contactbook.schemas.contact import Contact

logger = logging.getLogger(__name__)


# ── Seed Records ──────────────────────────────────────────────────────────
SEED_CONTACTS = (
    Contact(id=1, name="John Doe", phone="+628912345678", email="johndoe@example.com"),
    Contact(id=2, name="Samantha Jane", phone="+628912345999", email="samantha@example.com"),
)


class ContactStore:
    """
    Ordered, append-only contact collection.

    Records are copied on the way in and on the way out, so callers can
    never alter what the store holds.
    """

    def __init__(self, seed: Optional[Iterable[Contact]] = None) -> None:
        self._lock = asyncio.Lock()
        initial = SEED_CONTACTS if seed is None else seed
        self._contacts: List[Contact] = [contact.model_copy() for contact in initial]

    def __len__(self) -> int:
        return len(self._contacts)

    async def list_all(self) -> List[Contact]:
        """Every contact, in insertion order."""
        async with self._lock:
            return [contact.model_copy() for contact in self._contacts]

    async def append(self, contact: Contact) -> Contact:
        """Append a record as-is. Duplicate ids are accepted."""
        async with self._lock:
            self._contacts.append(contact.model_copy())
            size = len(self._contacts)
        logger.info("Contact appended: id=%d (store size=%d)", contact.id, size)
        return contact

    async def find_first(self, contact_id: int) -> Optional[Contact]:
        """
        Linear scan for the first record carrying `contact_id`.

        Returns None when the scan is exhausted without a match.
        """
        async with self._lock:
            for contact in self._contacts:
                if contact.id == contact_id:
                    return contact.model_copy()
        return None


# ── Store Dependency ──────────────────────────────────────────────────────
def get_contact_store(request: Request) -> ContactStore:
    """
    FastAPI dependency that provides the application's contact store.

    Example usage in a route:
        @router.get("/contacts")
        async def list_contacts(store: ContactStore = Depends(get_contact_store)):
            ...
    """
    return request.app.state.contact_store
