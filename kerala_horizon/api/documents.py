"""
Document vault routes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..models.document import DocumentCreate, DocumentUpdate, ScanRequest, ShareRequest
from ..models.user import UserProfile
from ..services.document_vault import EXPIRING_SOON_DAYS, document_vault
from .deps import get_current_user, ok

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.post("", status_code=201)
async def upload_document(data: DocumentCreate, user: UserProfile = Depends(get_current_user)):
    """Add a document, optionally with base64 file contents."""
    document = document_vault.add_document(user.uid, data)
    return ok({"document": document}, message="Document uploaded successfully")


@router.post("/scan", status_code=201)
async def scan_document(request: ScanRequest, user: UserProfile = Depends(get_current_user)):
    """Create a document from text recognised in a scan."""
    document = document_vault.scan_document(user.uid, request.text, request.category)
    return ok({
        "document": document,
        "extracted_data": document.extracted_data,
    }, message="Document scanned successfully")


@router.get("")
async def list_documents(
    category: Optional[str] = None,
    tag: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: UserProfile = Depends(get_current_user),
):
    documents, pagination = document_vault.list_documents(user.uid, category, tag, limit, offset)
    return ok({"documents": documents, "pagination": pagination})


@router.get("/expiry-alerts")
async def expiry_alerts(
    days: int = Query(EXPIRING_SOON_DAYS, ge=0, le=3650),
    user: UserProfile = Depends(get_current_user),
):
    return ok(document_vault.expiry_alerts(user.uid, days))


@router.get("/expiry-alerts/{days}")
async def expiry_alerts_within(days: int, user: UserProfile = Depends(get_current_user)):
    return ok(document_vault.expiry_alerts(user.uid, days))


@router.post("/cloud-sync")
async def toggle_cloud_sync(user: UserProfile = Depends(get_current_user)):
    enabled = document_vault.toggle_cloud_sync(user.uid)
    state = "enabled" if enabled else "disabled"
    return ok({"cloud_sync_enabled": enabled}, message=f"Cloud sync {state}")


@router.get("/shared/{share_id}")
async def get_shared_document(share_id: str):
    """Open a document through a share link; no sign-in required."""
    document = document_vault.get_shared_document(share_id)
    return ok({"document": document.model_dump(mode="json", exclude={"user_id", "shared_with"})})


@router.get("/{document_id}")
async def get_document(document_id: str, user: UserProfile = Depends(get_current_user)):
    return ok({"document": document_vault.get_document(user.uid, document_id)})


@router.put("/{document_id}")
async def update_document(document_id: str, updates: DocumentUpdate, user: UserProfile = Depends(get_current_user)):
    document = document_vault.update_document(user.uid, document_id, updates.model_dump(exclude_unset=True))
    return ok({"document": document}, message="Document updated successfully")


@router.delete("/{document_id}")
async def delete_document(document_id: str, user: UserProfile = Depends(get_current_user)):
    document_vault.delete_document(user.uid, document_id)
    return ok(message="Document deleted successfully")


@router.post("/{document_id}/share")
async def share_document(
    document_id: str,
    share: ShareRequest,
    request: Request,
    user: UserProfile = Depends(get_current_user),
):
    record = document_vault.share_document(
        user.uid,
        document_id,
        share.method,
        share.recipient,
        base_url=str(request.base_url).rstrip("/"),
    )
    return ok({
        "share_id": record.id,
        "share_link": record.share_link,
        "expires_at": record.expires_at,
    }, message="Document shared successfully")
