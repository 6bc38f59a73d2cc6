"""
Contactbook API — Contact Service Unit Tests
==============================================

What:  Tests for ContactService decoding, id parsing and operations.
How:   Calls the service directly with a real in-memory store (no HTTP).

What we test:
    ✅ Stream-decoder semantics (whitespace, trailing data, null, non-objects)
    ✅ Strict JSON types and the 64-bit id range
    ✅ Id parsing (sign, leading zeros, rejected forms)
    ✅ create / get / list against the store
"""

import pytest

from contactbook.exceptions import (
    InvalidIdentifierError,
    InvalidPayloadError,
    NotFoundError,
)
from contactbook.schemas.contact import INT64_MAX, INT64_MIN, Contact
from contactbook.services.contact_service import ContactService


class TestDecodeContact:
    """Tests for ContactService.decode_contact."""

    def setup_method(self):
        self.service = ContactService()

    def test_full_record(self):
        contact = self.service.decode_contact(
            b'{"id": 5, "name": "Fajar", "phone": "+62", "email": "f@example.com"}'
        )

        assert contact == Contact(id=5, name="Fajar", phone="+62", email="f@example.com")

    def test_missing_fields_take_zero_values(self):
        assert self.service.decode_contact(b'{"name": "Gita"}') == Contact(name="Gita")

    def test_null_fields_take_zero_values(self):
        contact = self.service.decode_contact(b'{"id": null, "name": null, "email": "g@x"}')

        assert contact == Contact(email="g@x")

    def test_unknown_keys_are_ignored(self):
        contact = self.service.decode_contact(b'{"id": 4, "nickname": "Hadi"}')

        assert contact == Contact(id=4)

    def test_top_level_null_is_zero_contact(self):
        assert self.service.decode_contact(b"null") == Contact()

    def test_leading_whitespace_and_trailing_data_are_tolerated(self):
        contact = self.service.decode_contact(b' \n\t{"id": 8} trailing garbage')

        assert contact.id == 8

    def test_lone_surrogate_escapes_become_replacement_char(self):
        contact = self.service.decode_contact(b'{"name": "a\\ud800b", "phone": "\\udc00"}')

        assert contact.name == "a\ufffdb"
        assert contact.phone == "\ufffd"
        assert contact.model_dump_json().encode("utf-8")

    def test_malformed_utf8_is_replaced_not_rejected(self):
        contact = self.service.decode_contact(b'{"name": "caf\xe9"}')

        assert contact.name == "caf\ufffd"

    @pytest.mark.parametrize(
        "body",
        [
            b"",
            b"   \n",
            b"{",
            b'{"id": 1,}',
            b"[]",
            b'"contact"',
            b"42",
            b"NaN",
            b'{"id": Infinity}',
        ],
    )
    def test_undecodable_bodies(self, body):
        with pytest.raises(InvalidPayloadError):
            self.service.decode_contact(body)

    @pytest.mark.parametrize(
        "body",
        [
            b'{"id": "1"}',
            b'{"id": 1.5}',
            b'{"id": 1.0}',
            b'{"id": true}',
            b'{"name": 7}',
            b'{"email": ["a@b"]}',
        ],
    )
    def test_wrong_json_types(self, body):
        with pytest.raises(InvalidPayloadError):
            self.service.decode_contact(body)

    def test_id_range_is_signed_64_bit(self):
        assert self.service.decode_contact(f'{{"id": {INT64_MAX}}}'.encode()).id == INT64_MAX
        assert self.service.decode_contact(f'{{"id": {INT64_MIN}}}'.encode()).id == INT64_MIN

        with pytest.raises(InvalidPayloadError):
            self.service.decode_contact(f'{{"id": {INT64_MAX + 1}}}'.encode())

    def test_error_message_is_wire_text(self):
        with pytest.raises(InvalidPayloadError) as exc_info:
            self.service.decode_contact(b"{")

        assert exc_info.value.message == "invalid payload"
        assert "reason" in exc_info.value.context


class TestParseContactId:
    """Tests for ContactService.parse_contact_id."""

    def setup_method(self):
        self.service = ContactService()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", 1), ("+7", 7), ("-3", -3), ("007", 7), ("0", 0), (str(INT64_MIN), INT64_MIN)],
    )
    def test_valid_ids(self, raw, expected):
        assert self.service.parse_contact_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["abc", "", " 7", "7 ", "7.0", "1_000", "0x10", "+", "\u0663", str(INT64_MAX + 1)],
    )
    def test_invalid_ids(self, raw):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            self.service.parse_contact_id(raw)

        assert exc_info.value.message == "invalid id"
        assert exc_info.value.raw_id == raw


class TestContactOperations:
    """Tests for list/create/get over a real store."""

    def setup_method(self):
        self.service = ContactService()

    @pytest.mark.asyncio
    async def test_list_returns_seeds(self, contact_store):
        result = await self.service.list_contacts(contact_store)

        assert result.message == "OK"
        assert [c.name for c in result.data] == ["John Doe", "Samantha Jane"]

    @pytest.mark.asyncio
    async def test_create_appends_exactly_one(self, contact_store):
        result = await self.service.create_contact(contact_store, b'{"id": 9, "name": "Indra"}')

        assert result.message == "OK"
        assert result.data == Contact(id=9, name="Indra")
        assert len(contact_store) == 3

    @pytest.mark.asyncio
    async def test_failed_create_leaves_store_untouched(self, contact_store):
        with pytest.raises(InvalidPayloadError):
            await self.service.create_contact(contact_store, b"{oops")

        assert len(contact_store) == 2

    @pytest.mark.asyncio
    async def test_get_returns_first_match(self, contact_store):
        await self.service.create_contact(contact_store, b'{"id": 1, "name": "Duplicate"}')

        result = await self.service.get_contact(contact_store, "1")

        assert result.data.name == "John Doe"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, contact_store):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_contact(contact_store, "999")

        assert exc_info.value.message == "data not found"
        assert exc_info.value.contact_id == 999

    @pytest.mark.asyncio
    async def test_get_invalid_id_raises(self, contact_store):
        with pytest.raises(InvalidIdentifierError):
            await self.service.get_contact(contact_store, "one")
