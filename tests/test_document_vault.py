"""Tests for the document vault."""
import base64
from datetime import date, timedelta

import pytest

from kerala_horizon.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from kerala_horizon.models.document import (
    DocumentCategory,
    DocumentCreate,
    ExpiryStatus,
    ShareMethod,
    Urgency,
)
from kerala_horizon.services.document_vault import (
    DocumentVault,
    DocumentVaultError,
    classify_expiry,
    detect_document_category,
    extract_document_data,
    generate_document_name,
    reminder_dates,
    urgency_for,
)
from kerala_horizon.services.store import Database

TODAY = date(2026, 1, 1)

PASSPORT_TEXT = """REPUBLIC OF INDIA PASSPORT
Anita Menon
K1234567
Date of issue 01/02/2020
Date of expiry 01/02/2030"""


@pytest.fixture
def vault():
    return DocumentVault(database=Database(), secret="test-secret")


class TestExpiryRules:
    """Test expiry buckets, urgency and reminders."""

    def test_classify_expiry(self):
        assert classify_expiry(None, TODAY) == ExpiryStatus.NO_EXPIRY
        assert classify_expiry(TODAY - timedelta(days=1), TODAY) == ExpiryStatus.EXPIRED
        assert classify_expiry(TODAY, TODAY) == ExpiryStatus.EXPIRING_SOON
        assert classify_expiry(TODAY + timedelta(days=30), TODAY) == ExpiryStatus.EXPIRING_SOON
        assert classify_expiry(TODAY + timedelta(days=31), TODAY) == ExpiryStatus.VALID

    def test_urgency(self):
        assert urgency_for(-3) == Urgency.HIGH
        assert urgency_for(5) == Urgency.HIGH
        assert urgency_for(15) == Urgency.MEDIUM
        assert urgency_for(16) == Urgency.LOW

    def test_reminders_far_from_expiry(self):
        schedule = reminder_dates(TODAY + timedelta(days=100), TODAY)
        assert [offset for offset, _ in schedule] == [30, 15, 5, 0]
        assert schedule[0][1] == TODAY + timedelta(days=70)

    def test_reminders_close_to_expiry(self):
        schedule = reminder_dates(TODAY + timedelta(days=10), TODAY)
        assert [offset for offset, _ in schedule] == [5, 0]

    def test_no_reminders_for_expired(self):
        assert reminder_dates(TODAY - timedelta(days=1), TODAY) == []


class TestScanHeuristics:
    """Test recognition of scanned text."""

    def test_detect_category(self):
        assert detect_document_category("Tourist VISA") == DocumentCategory.VISA
        assert detect_document_category("Travel policy no 77") == DocumentCategory.INSURANCE
        assert detect_document_category("Covid vaccine record") == DocumentCategory.VACCINATION
        assert detect_document_category("Hotel receipt") == DocumentCategory.OTHER

    def test_extract_passport(self):
        data = extract_document_data(PASSPORT_TEXT, DocumentCategory.PASSPORT)
        assert data.document_number == "K1234567"
        assert data.name == "Anita Menon"
        assert data.issue_date == date(2020, 2, 1)
        assert data.expiry_date == date(2030, 2, 1)

    def test_vaccination_has_no_expiry(self):
        data = extract_document_data("vaccination on 12/03/2021", DocumentCategory.VACCINATION)
        assert data.dates == ["12/03/2021"]
        assert data.expiry_date is None

    def test_invalid_date_is_skipped(self):
        data = extract_document_data("visa valid until 31/02/2030", DocumentCategory.VISA)
        assert data.expiry_date is None

    def test_generated_names(self):
        data = extract_document_data(PASSPORT_TEXT, DocumentCategory.PASSPORT)
        assert generate_document_name(data, DocumentCategory.PASSPORT) == "Anita Menon - PASSPORT"
        data.name = None
        assert generate_document_name(data, DocumentCategory.PASSPORT) == "PASSPORT - K1234567"
        data.document_number = None
        assert generate_document_name(data, DocumentCategory.PASSPORT, TODAY) == "PASSPORT - 01/01/2026"


class TestSealing:
    """Test the stored form of a vault."""

    def test_round_trip(self, vault):
        vault.add_document("u1", DocumentCreate(name="Passport", category=DocumentCategory.PASSPORT))
        documents = vault.load("u1")
        assert len(documents) == 1
        assert documents[0].name == "Passport"

    def test_tampered_blob_fails(self, vault):
        vault.add_document("u1", DocumentCreate(name="Passport"))
        stored = vault.vaults.get("u1")
        vault.vaults.set("u1", stored.model_copy(update={"blob": "x" + stored.blob}))
        with pytest.raises(DocumentVaultError):
            vault.load("u1")

    def test_blob_bound_to_user(self, vault):
        vault.add_document("u1", DocumentCreate(name="Passport"))
        blob = vault.vaults.get("u1").blob
        with pytest.raises(DocumentVaultError):
            vault.unseal("u2", blob)

    def test_payload_is_not_plain_json(self, vault):
        vault.add_document("u1", DocumentCreate(name="Secret Visa"))
        assert "Secret Visa" not in vault.vaults.get("u1").blob


class TestVaultOperations:
    """Test add, list, update, delete and alerts."""

    def test_add_schedules_reminders(self, vault):
        document = vault.add_document(
            "u1",
            DocumentCreate(name="Visa", category=DocumentCategory.VISA, expiry_date=TODAY + timedelta(days=100)),
            today=TODAY,
        )
        reminders = vault.notifications.where(document_id=document.id)
        assert sorted(r.days_before for r in reminders) == [0, 5, 15, 30]

    def test_add_assigns_its_own_id(self, vault):
        first = vault.add_document("u1", DocumentCreate.model_validate({"id": "doc-1", "name": "Ticket"}))
        second = vault.add_document("u1", DocumentCreate.model_validate({"id": "doc-1", "name": "Ticket again"}))
        assert first.id != "doc-1"
        assert first.id != second.id
        assert vault.owners.get(first.id).user_id == "u1"

    def test_other_user_cannot_take_over_a_document(self, vault):
        document = vault.add_document("u1", DocumentCreate(name="Visa"))
        vault.toggle_cloud_sync("u1")
        intruder = vault.add_document("u2", DocumentCreate.model_validate({"id": document.id, "name": "Mine"}))
        assert intruder.id != document.id

        vault.toggle_cloud_sync("u2")
        vault.delete_document("u2", intruder.id)

        assert vault.owners.get(document.id).user_id == "u1"
        assert vault.cloud.get(f"u1:{document.id}").name == "Visa"
        share = vault.share_document("u1", document.id, ShareMethod.EMAIL, "friend@example.com")
        assert share.document_id == document.id

    def test_rejects_bad_file_type(self, vault):
        data = base64.b64encode(b"hello").decode()
        with pytest.raises(ValidationError):
            vault.add_document("u1", DocumentCreate(name="Note", file_data=data, mime_type="text/plain"))

    def test_accepts_pdf(self, vault):
        data = base64.b64encode(b"%PDF-1.4").decode()
        document = vault.add_document("u1", DocumentCreate(name="Policy", file_data=data, mime_type="application/pdf"))
        assert document.file_data == data

    def test_list_filters_and_paginates(self, vault):
        vault.add_document("u1", DocumentCreate(name="Passport", category=DocumentCategory.PASSPORT, tags=["id"]))
        vault.add_document("u1", DocumentCreate(name="Visa", category=DocumentCategory.VISA, tags=["id"]))
        vault.add_document("u1", DocumentCreate(name="Ticket", tags=["travel"]))

        page, pagination = vault.list_documents("u1", limit=2)
        assert len(page) == 2
        assert pagination == {"total": 3, "limit": 2, "offset": 0, "has_more": True}

        visas, _ = vault.list_documents("u1", category="visa")
        assert [d.name for d in visas] == ["Visa"]

        tagged, _ = vault.list_documents("u1", tag="id")
        assert {d.name for d in tagged} == {"Passport", "Visa"}

    def test_update_merges(self, vault):
        document = vault.add_document("u1", DocumentCreate(name="Visa", notes="old"))
        updated = vault.update_document("u1", document.id, {"notes": "new"})
        assert updated.notes == "new"
        assert updated.name == "Visa"
        assert vault.get_document("u1", document.id).notes == "new"

    def test_update_and_delete_unknown(self, vault):
        with pytest.raises(NotFoundError):
            vault.update_document("u1", "missing", {"notes": "x"})
        with pytest.raises(NotFoundError):
            vault.delete_document("u1", "missing")

    def test_delete(self, vault):
        document = vault.add_document("u1", DocumentCreate(name="Visa"))
        vault.delete_document("u1", document.id)
        assert vault.load("u1") == []

    def test_delete_drops_reminders(self, vault):
        document = vault.add_document(
            "u1",
            DocumentCreate(name="Visa", expiry_date=TODAY + timedelta(days=100)),
            today=TODAY,
        )
        vault.delete_document("u1", document.id)
        assert vault.notifications.where(document_id=document.id) == []

    def test_expiry_change_reschedules_reminders(self, vault):
        document = vault.add_document(
            "u1",
            DocumentCreate(name="Visa", expiry_date=TODAY + timedelta(days=100)),
            today=TODAY,
        )
        new_expiry = TODAY + timedelta(days=10)
        vault.update_document("u1", document.id, {"expiry_date": new_expiry}, today=TODAY)

        reminders = vault.notifications.where(document_id=document.id)
        assert sorted(r.days_before for r in reminders) == [0, 5]
        assert all(r.expiry_date == new_expiry for r in reminders)

    def test_notes_change_keeps_reminders(self, vault):
        document = vault.add_document(
            "u1",
            DocumentCreate(name="Visa", expiry_date=TODAY + timedelta(days=100)),
            today=TODAY,
        )
        before = {r.id for r in vault.notifications.where(document_id=document.id)}
        vault.update_document("u1", document.id, {"notes": "renewal booked"}, today=TODAY)
        assert {r.id for r in vault.notifications.where(document_id=document.id)} == before

    def test_expiry_alerts(self, vault):
        vault.add_document("u1", DocumentCreate(name="Expired", expiry_date=TODAY - timedelta(days=2)), today=TODAY)
        vault.add_document("u1", DocumentCreate(name="Soon", expiry_date=TODAY + timedelta(days=3)), today=TODAY)
        vault.add_document("u1", DocumentCreate(name="Later", expiry_date=TODAY + timedelta(days=20)), today=TODAY)
        vault.add_document("u1", DocumentCreate(name="Far", expiry_date=TODAY + timedelta(days=200)), today=TODAY)

        result = vault.expiry_alerts("u1", 30, today=TODAY)
        assert [a.name for a in result["alerts"]] == ["Expired", "Soon", "Later"]
        assert result["total_alerts"] == 3
        assert result["expired_count"] == 1
        assert result["expiring_soon_count"] == 1
        assert result["alerts"][2].urgency == Urgency.LOW

    def test_scan_stores_document(self, vault):
        document = vault.scan_document("u1", PASSPORT_TEXT, today=TODAY)
        assert document.category == DocumentCategory.PASSPORT
        assert document.name == "Anita Menon - PASSPORT"
        assert "has-document-number" in document.tags
        assert document.expiry_date == date(2030, 2, 1)
        assert vault.get_document("u1", document.id).id == document.id


class TestSharing:
    """Test document shares and cloud sync."""

    def test_share_by_link(self, vault):
        document = vault.add_document("u1", DocumentCreate(name="Visa"))
        share = vault.share_document("u1", document.id, ShareMethod.LINK, "friend@example.com", "http://testserver")
        assert share.share_link == f"http://testserver/api/documents/shared/{share.id}"
        assert vault.get_shared_document(share.id).id == document.id
        assert vault.get_document("u1", document.id).shared_with == ["friend@example.com"]

    def test_share_requires_method_and_recipient(self, vault):
        document = vault.add_document("u1", DocumentCreate(name="Visa"))
        with pytest.raises(ValidationError):
            vault.share_document("u1", document.id, None, "friend@example.com")

    def test_only_owner_can_share(self, vault):
        document = vault.add_document("u1", DocumentCreate(name="Visa"))
        with pytest.raises(PermissionDeniedError):
            vault.share_document("u2", document.id, ShareMethod.EMAIL, "friend@example.com")

    def test_cloud_sync_toggle(self, vault):
        vault.add_document("u1", DocumentCreate(name="Visa"))
        assert vault.toggle_cloud_sync("u1") is True
        assert vault.cloud.count() == 1

        vault.add_document("u1", DocumentCreate(name="Passport"))
        assert vault.cloud.count() == 2

        assert vault.toggle_cloud_sync("u1") is False
        assert len(vault.load("u1")) == 2
