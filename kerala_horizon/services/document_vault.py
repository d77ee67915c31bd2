"""
Document Vault - per-user storage of travel documents.

Each user's documents are kept as one sealed blob: the JSON list is base64
encoded and tagged with an HMAC-SHA256 keyed by the vault secret and the user
id, so a blob that was altered or belongs to someone else will not load.
"""
import base64
import binascii
import hashlib
import hmac
import json
import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..config import settings
from ..core.errors import KeralaHorizonError, NotFoundError, PermissionDeniedError, ValidationError
from ..models.document import (
    Document,
    DocumentCategory,
    DocumentCreate,
    DocumentShare,
    ExpiryAlert,
    ExpiryReminder,
    ExpiryStatus,
    ExtractedData,
    SealedVault,
    ShareMethod,
    Urgency,
)
from .store import Database, db

logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 30
REMINDER_OFFSETS = [30, 15, 5, 0]
SHARE_TTL_DAYS = 7
MAX_FILE_BYTES = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/webp", "application/pdf"}

DATE_PATTERN = re.compile(r"(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{4})")
PASSPORT_NUMBER_PATTERN = re.compile(r"[A-Z]{1,2}\d{6,8}")
NAME_PATTERN = re.compile(r"([A-Z][a-z]+ [A-Z][a-z]+)")


class DocumentVaultError(KeralaHorizonError):
    """A stored vault could not be opened."""
    status_code = 500


class DocumentOwner(BaseModel):
    document_id: str
    user_id: str


# ---------------------------------------------------------------------------
# Expiry rules
# ---------------------------------------------------------------------------

def days_until(expiry: date, today: Optional[date] = None) -> int:
    """Whole days from today until expiry; negative once expired."""
    today = today or date.today()
    return (expiry - today).days


def classify_expiry(expiry: Optional[date], today: Optional[date] = None) -> ExpiryStatus:
    """Place a document into its expiry bucket."""
    if expiry is None:
        return ExpiryStatus.NO_EXPIRY
    remaining = days_until(expiry, today)
    if remaining < 0:
        return ExpiryStatus.EXPIRED
    if remaining <= EXPIRING_SOON_DAYS:
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.VALID


def urgency_for(remaining_days: int) -> Urgency:
    if remaining_days <= 5:
        return Urgency.HIGH
    if remaining_days <= 15:
        return Urgency.MEDIUM
    return Urgency.LOW


def reminder_dates(expiry: date, today: Optional[date] = None) -> list[tuple[int, date]]:
    """
    Reminder schedule for an expiry date.

    Returns (days_before, notify_on) for each offset in 30/15/5/0 that is
    still ahead of us.
    """
    today = today or date.today()
    remaining = days_until(expiry, today)
    schedule = []
    for offset in REMINDER_OFFSETS:
        if remaining >= offset:
            notify_on = expiry - timedelta(days=offset)
            if notify_on > today:
                schedule.append((offset, notify_on))
    return schedule


# ---------------------------------------------------------------------------
# Scanned text heuristics
# ---------------------------------------------------------------------------

def detect_document_category(text: str) -> DocumentCategory:
    lower = text.lower()
    if "passport" in lower:
        return DocumentCategory.PASSPORT
    if "visa" in lower:
        return DocumentCategory.VISA
    if "insurance" in lower or "policy" in lower:
        return DocumentCategory.INSURANCE
    if "vaccination" in lower or "vaccine" in lower:
        return DocumentCategory.VACCINATION
    return DocumentCategory.OTHER


def _parse_day_first(raw: str) -> Optional[date]:
    day, month, year = re.split(r"[/\-.]", raw)
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def extract_document_data(text: str, category: DocumentCategory) -> ExtractedData:
    """Pull dates, numbers and names out of recognised document text."""
    data = ExtractedData()

    dates = DATE_PATTERN.findall(text)
    if dates:
        data.dates = dates
        # The last date printed on these documents is the expiry
        if category in (DocumentCategory.PASSPORT, DocumentCategory.VISA, DocumentCategory.INSURANCE):
            data.expiry_date = _parse_day_first(dates[-1])
        if len(dates) > 1:
            data.issue_date = _parse_day_first(dates[0])

    if category == DocumentCategory.PASSPORT:
        match = PASSPORT_NUMBER_PATTERN.search(text)
        if match:
            data.document_number = match.group(0)

    names = NAME_PATTERN.findall(text)
    if names:
        data.names = names
        data.name = names[0]

    return data


def generate_document_name(data: ExtractedData, category: DocumentCategory, today: Optional[date] = None) -> str:
    label = category.value.upper()
    if data.name:
        return f"{data.name} - {label}"
    if data.document_number:
        return f"{label} - {data.document_number}"
    today = today or date.today()
    return f"{label} - {today.strftime('%d/%m/%Y')}"


def generate_tags(data: ExtractedData, category: DocumentCategory, today: Optional[date] = None) -> list[str]:
    tags = [category.value]
    if data.document_number:
        tags.append("has-document-number")
    status = classify_expiry(data.expiry_date, today)
    if status == ExpiryStatus.EXPIRED:
        tags.append("expired")
    elif status == ExpiryStatus.EXPIRING_SOON:
        tags.append("expiring-soon")
    return tags


# ---------------------------------------------------------------------------
# Vault
# ---------------------------------------------------------------------------

class DocumentVault:
    """Stores, seals and queries each user's documents."""

    def __init__(self, database: Database = db, secret: Optional[str] = None):
        self.secret = secret or settings.vault_secret
        self.vaults = database.collection("vaults")
        self.owners = database.collection("document_owners")
        self.shares = database.collection("document_shares")
        self.notifications = database.collection("notifications")
        self.cloud = database.collection("documents")

    # -- sealing ----------------------------------------------------------

    def _key(self, user_id: str) -> bytes:
        return f"{self.secret}:{user_id}".encode("utf-8")

    def seal(self, user_id: str, documents: list[Document]) -> str:
        payload = json.dumps([d.model_dump(mode="json") for d in documents]).encode("utf-8")
        encoded = base64.b64encode(payload).decode("ascii")
        tag = hmac.new(self._key(user_id), encoded.encode("ascii"), hashlib.sha256).hexdigest()
        return f"{encoded}.{tag}"

    def unseal(self, user_id: str, blob: str) -> list[Document]:
        encoded, _, tag = blob.rpartition(".")
        expected = hmac.new(self._key(user_id), encoded.encode("ascii"), hashlib.sha256).hexdigest()
        if not encoded or not hmac.compare_digest(expected, tag):
            raise DocumentVaultError("Failed to load documents")
        try:
            raw = json.loads(base64.b64decode(encoded, validate=True))
            return [Document.model_validate(item) for item in raw]
        except (binascii.Error, ValueError, PydanticValidationError) as e:
            logger.error(f"Error loading documents for {user_id}: {e}")
            raise DocumentVaultError("Failed to load documents") from e

    # -- persistence ------------------------------------------------------

    def load(self, user_id: str) -> list[Document]:
        vault = self.vaults.get(user_id)
        if vault is None:
            return []
        return self.unseal(user_id, vault.blob)

    def save(self, user_id: str, documents: list[Document]):
        current = self.vaults.get(user_id)
        sync = current.cloud_sync_enabled if current else False
        self.vaults.set(user_id, SealedVault(
            user_id=user_id,
            blob=self.seal(user_id, documents),
            cloud_sync_enabled=sync,
        ))
        if sync:
            self._push_to_cloud(user_id, documents)

    # -- CRUD -------------------------------------------------------------

    def add_document(self, user_id: str, data: DocumentCreate, today: Optional[date] = None) -> Document:
        """Add a document and schedule its expiry reminders.

        Ids are always assigned here; ownership is keyed by id across all users.
        """
        self._check_file(data.file_data, data.mime_type)
        now = datetime.now()
        document = Document(user_id=user_id, created_at=now, updated_at=now, **data.model_dump(exclude_none=True))

        documents = self.load(user_id)
        self.save(user_id, [*documents, document])
        self.owners.set(document.id, DocumentOwner(document_id=document.id, user_id=user_id))

        if document.effective_expiry:
            self.schedule_expiry_reminders(document, today)

        logger.info(f"Added document {document.id} for {user_id}")
        return document

    @staticmethod
    def _check_file(file_data: Optional[str], mime_type: Optional[str]):
        if file_data is None:
            return
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError("Invalid file type. Only JPEG, PNG, WebP and PDF files are allowed.")
        try:
            size = len(base64.b64decode(file_data, validate=True))
        except binascii.Error as e:
            raise ValidationError("File data must be base64 encoded") from e
        if size > MAX_FILE_BYTES:
            raise ValidationError("File too large. Maximum size is 10MB.")

    def get_document(self, user_id: str, document_id: str) -> Document:
        for document in self.load(user_id):
            if document.id == document_id:
                return document
        raise NotFoundError("Document not found")

    def update_document(
        self,
        user_id: str,
        document_id: str,
        updates: dict,
        today: Optional[date] = None,
    ) -> Document:
        """Merge updates into a document, rescheduling reminders when its expiry moves."""
        documents = self.load(user_id)
        for index, document in enumerate(documents):
            if document.id == document_id:
                merged = Document.model_validate({
                    **document.model_dump(),
                    **updates,
                    "id": document.id,
                    "user_id": user_id,
                    "updated_at": datetime.now(),
                })
                documents[index] = merged
                self.save(user_id, documents)
                if merged.effective_expiry != document.effective_expiry:
                    self.clear_expiry_reminders(document_id)
                    self.schedule_expiry_reminders(merged, today)
                return merged
        raise NotFoundError("Document not found")

    def delete_document(self, user_id: str, document_id: str):
        documents = self.load(user_id)
        remaining = [d for d in documents if d.id != document_id]
        if len(remaining) == len(documents):
            raise NotFoundError("Document not found")
        self.save(user_id, remaining)
        self.owners.delete(document_id)
        self.cloud.delete(self._cloud_key(user_id, document_id))
        self.clear_expiry_reminders(document_id)

    def list_documents(
        self,
        user_id: str,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Document], dict]:
        """List a user's documents newest first, with pagination info."""
        documents = sorted(self.load(user_id), key=lambda d: d.created_at, reverse=True)
        if category:
            documents = [d for d in documents if d.category.value == category]
        if tag:
            documents = [d for d in documents if tag in d.tags]
        total = len(documents)
        page = documents[offset:offset + limit]
        return page, {
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": total > offset + limit,
        }

    # -- expiry -----------------------------------------------------------

    def schedule_expiry_reminders(self, document: Document, today: Optional[date] = None) -> list[ExpiryReminder]:
        expiry = document.effective_expiry
        if expiry is None:
            return []
        reminders = []
        for offset, notify_on in reminder_dates(expiry, today):
            reminder = ExpiryReminder(
                user_id=document.user_id,
                document_id=document.id,
                document_name=document.name,
                days_before=offset,
                notify_on=notify_on,
                expiry_date=expiry,
            )
            self.notifications.set(reminder.id, reminder)
            reminders.append(reminder)
            logger.debug(f"Scheduling notification for {document.name} {offset} days before expiry")
        return reminders

    def clear_expiry_reminders(self, document_id: str) -> int:
        stale = self.notifications.where(document_id=document_id)
        for reminder in stale:
            self.notifications.delete(reminder.id)
        return len(stale)

    def expiry_alerts(self, user_id: str, within_days: int = 30, today: Optional[date] = None) -> dict:
        """Documents expiring within the window, including already expired ones."""
        today = today or date.today()
        alerts = []
        for document in self.load(user_id):
            expiry = document.effective_expiry
            if expiry is None or expiry > today + timedelta(days=within_days):
                continue
            remaining = days_until(expiry, today)
            alerts.append(ExpiryAlert(
                id=document.id,
                name=document.name,
                category=document.category,
                expiry_date=expiry,
                days_until_expiry=remaining,
                is_expired=remaining < 0,
                urgency=urgency_for(remaining),
            ))
        alerts.sort(key=lambda a: a.days_until_expiry)
        return {
            "alerts": alerts,
            "total_alerts": len(alerts),
            "expired_count": sum(1 for a in alerts if a.is_expired),
            "expiring_soon_count": sum(1 for a in alerts if a.days_until_expiry <= 5 and not a.is_expired),
        }

    # -- scan / share / sync ----------------------------------------------

    def scan_document(
        self,
        user_id: str,
        text: str,
        category: Optional[DocumentCategory] = None,
        today: Optional[date] = None,
    ) -> Document:
        """Create a document from recognised text."""
        category = category or detect_document_category(text)
        extracted = extract_document_data(text, category)
        return self.add_document(user_id, DocumentCreate(
            name=generate_document_name(extracted, category, today)[:100],
            category=category,
            tags=generate_tags(extracted, category, today),
            expiry_date=extracted.expiry_date,
            extracted_data=extracted,
        ), today)

    def share_document(
        self,
        user_id: str,
        document_id: str,
        method: Optional[ShareMethod],
        recipient: Optional[str],
        base_url: str = "",
    ) -> DocumentShare:
        if not method or not recipient:
            raise ValidationError("Method and recipient are required")

        owner = self.owners.get(document_id)
        if owner is None:
            raise NotFoundError("Document not found")
        if owner.user_id != user_id:
            raise PermissionDeniedError("Access denied")

        document = self.get_document(user_id, document_id)
        share = DocumentShare(
            document_id=document_id,
            shared_by=user_id,
            shared_with=recipient,
            method=method,
            expires_at=datetime.now() + timedelta(days=SHARE_TTL_DAYS),
        )
        if method == ShareMethod.LINK:
            share.share_link = f"{base_url}/api/documents/shared/{share.id}"
        self.shares.set(share.id, share)

        if recipient not in document.shared_with:
            self.update_document(user_id, document_id, {"shared_with": [*document.shared_with, recipient]})
        logger.info(f"Document {document_id} shared by {user_id} via {method.value}")
        return share

    def get_shared_document(self, share_id: str) -> Document:
        share = self.shares.get(share_id)
        if share is None or share.expires_at <= datetime.now():
            raise NotFoundError("Share link not found or expired")
        return self.get_document(share.shared_by, share.document_id)

    def toggle_cloud_sync(self, user_id: str) -> bool:
        """Flip cloud sync; turning it on pushes the current documents."""
        documents = self.load(user_id)
        current = self.vaults.get(user_id)
        enabled = not (current.cloud_sync_enabled if current else False)
        self.vaults.set(user_id, SealedVault(
            user_id=user_id,
            blob=current.blob if current else self.seal(user_id, documents),
            cloud_sync_enabled=enabled,
        ))
        if enabled:
            logger.info(f"Syncing {len(documents)} documents to cloud for {user_id}")
            self._push_to_cloud(user_id, documents)
        return enabled

    @staticmethod
    def _cloud_key(user_id: str, document_id: str) -> str:
        return f"{user_id}:{document_id}"

    def _push_to_cloud(self, user_id: str, documents: list[Document]):
        for stale in self.cloud.where(user_id=user_id):
            self.cloud.delete(self._cloud_key(user_id, stale.id))
        for document in documents:
            self.cloud.set(self._cloud_key(user_id, document.id), document)


# Global vault instance
document_vault = DocumentVault()
