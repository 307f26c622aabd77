"""
Document gate: required-document catalog, per-document verification state machine,
and the completion predicate checked before an application may be submitted.

Each upload moves Pending -> Scanning -> Analyzing -> Verified, one stage per call
to the verification service. Only the terminal status matters for submission.
"""
from __future__ import annotations

import logging
import uuid
from enum import Enum
from pathlib import PurePath
from typing import Any, Iterable, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import DocumentBatch, DocumentUpload

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = {".pdf", ".jpg", ".jpeg", ".png"}


class DocumentStatus(str, Enum):
    PENDING = "Pending"
    SCANNING = "Scanning"
    ANALYZING = "Analyzing"
    VERIFIED = "Verified"


_NEXT_STATUS = {
    DocumentStatus.PENDING: DocumentStatus.SCANNING,
    DocumentStatus.SCANNING: DocumentStatus.ANALYZING,
    DocumentStatus.ANALYZING: DocumentStatus.VERIFIED,
}


REQUIRED_DOCS_STRUCTURE: list[dict[str, Any]] = [
    {
        "category": "KYC Documents",
        "items": [
            {"id": "kyc_biz_pan", "label": "Business PAN Card", "required": True},
            {"id": "kyc_own_pan", "label": "Owner's PAN Card", "required": True},
            {"id": "kyc_own_aadhar", "label": "Owner's Aadhar", "required": True},
            {"id": "kyc_office_proof", "label": "Office Address Proof", "required": True},
        ],
    },
    {
        "category": "Income Proof",
        "items": [
            {"id": "inc_pnl", "label": "P&L Statement (3 Years)", "required": True},
            {"id": "inc_balance", "label": "Balance Sheet (3 Years)", "required": True},
            {"id": "inc_itr", "label": "ITR Acknowledgement (3 Years)", "required": True},
            {"id": "inc_bank", "label": "Bank Statement (6-12 Months)", "required": True},
        ],
    },
    {
        "category": "Business Proof",
        "items": [
            {"id": "biz_reg", "label": "Business Registration Cert", "required": True},
            {"id": "biz_cin", "label": "Corporate Identity Number (CIN)", "required": False},
            {"id": "biz_directors", "label": "List of Directors", "required": False},
        ],
    },
]

ALL_DOC_IDS = frozenset(item["id"] for section in REQUIRED_DOCS_STRUCTURE for item in section["items"])
REQUIRED_DOC_IDS = tuple(
    item["id"] for section in REQUIRED_DOCS_STRUCTURE for item in section["items"] if item["required"]
)


class DocumentRejected(ValueError):
    """Upload refused before it entered the verification pipeline."""


class InvalidDocumentTransition(ValueError):
    pass


def next_status(status: DocumentStatus | str) -> DocumentStatus:
    current = DocumentStatus(status)
    if current not in _NEXT_STATUS:
        raise InvalidDocumentTransition(f"Document already {current.value}")
    return _NEXT_STATUS[current]


def _status_of(record: Any) -> str | None:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get("status")
    return getattr(record, "status", None)


def is_complete(required_ids: Iterable[str], uploaded: Mapping[str, Any]) -> bool:
    """True iff every required id maps to a record whose status is Verified."""
    return all(_status_of(uploaded.get(doc_id)) == DocumentStatus.VERIFIED.value for doc_id in required_ids)


def uploaded_map(batch: DocumentBatch) -> dict[str, dict[str, Any]]:
    return {
        d.doc_id: {"status": d.status, "fileName": d.file_name}
        for d in batch.documents
    }


def check_upload(doc_id: str, file_name: str | None, size_bytes: int) -> None:
    if doc_id not in ALL_DOC_IDS:
        raise DocumentRejected(f"Unknown document type '{doc_id}'")
    suffix = PurePath(file_name or "").suffix.lower()
    if suffix not in ALLOWED_EXTENSIONS:
        raise DocumentRejected("Only PDF, JPEG or PNG files are accepted.")
    if size_bytes == 0:
        raise DocumentRejected("File is empty.")
    if size_bytes > MAX_UPLOAD_BYTES:
        raise DocumentRejected("File exceeds the 5MB limit.")


async def open_batch(session: AsyncSession) -> DocumentBatch:
    batch = DocumentBatch(id=f"batch-{uuid.uuid4().hex[:12]}", application_ref_id=None)
    session.add(batch)
    await session.flush()
    await session.refresh(batch, ["documents"])
    return batch


async def get_batch(session: AsyncSession, batch_id: str) -> DocumentBatch | None:
    result = await session.execute(
        select(DocumentBatch).options(selectinload(DocumentBatch.documents)).where(DocumentBatch.id == batch_id)
    )
    return result.scalar_one_or_none()


async def record_upload(
    session: AsyncSession,
    batch: DocumentBatch,
    doc_id: str,
    file_name: str | None,
    content_type: str | None,
    size_bytes: int,
) -> DocumentUpload:
    """Register (or replace) a document in the batch. Replacing restarts verification."""
    check_upload(doc_id, file_name, size_bytes)
    upload = next((d for d in batch.documents if d.doc_id == doc_id), None)
    if upload is None:
        upload = DocumentUpload(id=f"doc-{uuid.uuid4().hex[:12]}", batch_id=batch.id, doc_id=doc_id)
        batch.documents.append(upload)
    upload.file_name = file_name
    upload.content_type = content_type
    upload.size_bytes = size_bytes
    upload.status = DocumentStatus.PENDING.value
    await session.flush()
    logger.info("Document %s received for %s (%d bytes)", doc_id, batch.id, size_bytes)
    return upload


async def advance_document(session: AsyncSession, upload: DocumentUpload, verifier) -> DocumentStatus:
    """Run the verification stage for the current status; move on if it passes."""
    current = DocumentStatus(upload.status)
    target = next_status(current)
    if await verifier.run_stage(upload, current):
        upload.status = target.value
        await session.flush()
        logger.info("Document %s in %s: %s -> %s", upload.doc_id, upload.batch_id, current.value, target.value)
        return target
    logger.info("Document %s in %s held at %s", upload.doc_id, upload.batch_id, current.value)
    return current
