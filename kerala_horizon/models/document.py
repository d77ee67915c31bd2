"""
Document vault models - travel documents, shares and expiry alerts.
"""
from pydantic import BaseModel, Field
from typing import Annotated, Optional
from datetime import date, datetime
from enum import Enum
import uuid

Tag = Annotated[str, Field(min_length=1, max_length=50)]


class DocumentCategory(str, Enum):
    """Kinds of travel documents."""
    PASSPORT = "passport"
    VISA = "visa"
    INSURANCE = "insurance"
    VACCINATION = "vaccination"
    OTHER = "other"


class ExpiryStatus(str, Enum):
    """Expiry bucket of a document."""
    NO_EXPIRY = "no_expiry"
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    VALID = "valid"


class Urgency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ShareMethod(str, Enum):
    EMAIL = "email"
    LINK = "link"
    WHATSAPP = "whatsapp"


class ExtractedData(BaseModel):
    """Fields recognised in a scanned document."""
    name: Optional[str] = None
    document_number: Optional[str] = None
    expiry_date: Optional[date] = None
    issue_date: Optional[date] = None
    issuing_country: Optional[str] = None
    dates: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)


class Document(BaseModel):
    """A travel document kept in a user's vault."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str = Field(..., description="Owner of the document")
    name: str = Field(..., min_length=1, max_length=100)
    category: DocumentCategory = DocumentCategory.OTHER
    tags: list[Tag] = Field(default_factory=list, max_length=10)
    expiry_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=500)
    file_data: Optional[str] = Field(None, description="Base64 file contents")
    mime_type: Optional[str] = None
    ocr_text: Optional[str] = None
    extracted_data: ExtractedData = Field(default_factory=ExtractedData)
    shared_with: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def effective_expiry(self) -> Optional[date]:
        """Explicit expiry date, else the one read from the scan."""
        return self.expiry_date or self.extracted_data.expiry_date


class DocumentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: DocumentCategory = DocumentCategory.OTHER
    tags: list[Tag] = Field(default_factory=list, max_length=10)
    expiry_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=500)
    file_data: Optional[str] = None
    mime_type: Optional[str] = None
    extracted_data: Optional[ExtractedData] = None


class DocumentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[DocumentCategory] = None
    tags: Optional[list[Tag]] = Field(None, max_length=10)
    expiry_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=500)


class ScanRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Text recognised from the document image")
    category: Optional[DocumentCategory] = None


class ShareRequest(BaseModel):
    method: Optional[ShareMethod] = None
    recipient: Optional[str] = None


class DocumentShare(BaseModel):
    """A time-limited share of one document."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    document_id: str
    shared_by: str
    shared_with: str
    method: ShareMethod
    share_link: Optional[str] = None
    shared_at: datetime = Field(default_factory=datetime.now)
    expires_at: datetime


class ExpiryReminder(BaseModel):
    """A scheduled notification ahead of a document's expiry."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    document_id: str
    document_name: str
    days_before: int
    notify_on: date
    expiry_date: date
    is_sent: bool = False


class ExpiryAlert(BaseModel):
    id: str
    name: str
    category: DocumentCategory
    expiry_date: date
    days_until_expiry: int
    is_expired: bool
    urgency: Urgency


class SealedVault(BaseModel):
    """Stored form of a user's documents."""
    user_id: str
    blob: str
    cloud_sync_enabled: bool = False
    updated_at: datetime = Field(default_factory=datetime.now)
