"""
Contactbook API — Contact Store Unit Tests
============================================

What:  Tests for the seeded, append-only in-memory store.

What we test:
    ✅ Seed records and insertion order
    ✅ Duplicate ids and first-match lookup
    ✅ Records cannot be altered through returned copies
    ✅ Concurrent appends are all retained
"""

import asyncio

import pytest

from contactbook.schemas.contact import Contact
from contactbook.store import SEED_CONTACTS, ContactStore


class TestContactStore:
    """Tests for ContactStore."""

    @pytest.mark.asyncio
    async def test_starts_with_seed_records(self):
        store = ContactStore()

        contacts = await store.list_all()

        assert len(store) == 2
        assert contacts == list(SEED_CONTACTS)
        assert contacts[0].name == "John Doe"
        assert contacts[1].email == "samantha@example.com"

    @pytest.mark.asyncio
    async def test_custom_seed(self):
        store = ContactStore(seed=[])

        assert await store.list_all() == []
        assert await store.find_first(1) is None

    @pytest.mark.asyncio
    async def test_append_preserves_order(self, contact_store):
        await contact_store.append(Contact(id=30))
        await contact_store.append(Contact(id=10))
        await contact_store.append(Contact(id=20))

        ids = [c.id for c in await contact_store.list_all()]

        assert ids == [1, 2, 30, 10, 20]

    @pytest.mark.asyncio
    async def test_find_first_match_wins(self, contact_store):
        await contact_store.append(Contact(id=2, name="Later Two"))

        found = await contact_store.find_first(2)

        assert found.name == "Samantha Jane"

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, contact_store):
        assert await contact_store.find_first(999) is None

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, contact_store):
        listed = await contact_store.list_all()
        listed[0].name = "Mutated"
        listed.clear()

        found = await contact_store.find_first(1)
        found.email = "mutated@example.com"

        again = await contact_store.find_first(1)
        assert again.name == "John Doe"
        assert again.email == "johndoe@example.com"
        assert len(contact_store) == 2

    @pytest.mark.asyncio
    async def test_stores_are_independent(self):
        first, second = ContactStore(), ContactStore()

        await first.append(Contact(id=3))

        assert len(first) == 3
        assert len(second) == 2

    @pytest.mark.asyncio
    async def test_concurrent_appends_are_all_kept(self, contact_store):
        await asyncio.gather(
            *(contact_store.append(Contact(id=100 + i)) for i in range(50))
        )

        ids = [c.id for c in await contact_store.list_all()]

        assert len(ids) == 52
        assert sorted(ids[2:]) == [100 + i for i in range(50)]
