from typing import Any

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models import DocumentBatch, DocumentUpload
from services.documents import (
    MAX_UPLOAD_BYTES,
    REQUIRED_DOC_IDS,
    REQUIRED_DOCS_STRUCTURE,
    DocumentRejected,
    InvalidDocumentTransition,
    advance_document,
    get_batch,
    is_complete,
    open_batch,
    record_upload,
    uploaded_map,
)
from services.verification import StubVerificationService, get_verification_service

router = APIRouter(prefix="/api/documents", tags=["documents"])

MSG_BATCH_NOT_FOUND = "Document batch not found"


def _upload_to_response(d: DocumentUpload) -> dict[str, Any]:
    return {
        "docId": d.doc_id,
        "fileName": d.file_name,
        "contentType": d.content_type,
        "sizeBytes": d.size_bytes,
        "status": d.status,
    }


def _batch_to_response(batch: DocumentBatch) -> dict[str, Any]:
    return {
        "batchId": batch.id,
        "applicationRefId": batch.application_ref_id,
        "documents": {d.doc_id: _upload_to_response(d) for d in batch.documents},
        "requiredDocIds": list(REQUIRED_DOC_IDS),
        "complete": is_complete(REQUIRED_DOC_IDS, uploaded_map(batch)),
    }


async def _load_open_batch(db: AsyncSession, batch_id: str) -> DocumentBatch:
    batch = await get_batch(db, batch_id)
    if not batch:
        raise HTTPException(status_code=404, detail=MSG_BATCH_NOT_FOUND)
    if batch.application_ref_id:
        raise HTTPException(status_code=409, detail=f"Batch already submitted with {batch.application_ref_id}")
    return batch


@router.get("/catalog", response_model=list[dict])
async def document_catalog():
    return REQUIRED_DOCS_STRUCTURE


@router.post("/batches", response_model=dict, status_code=201)
async def create_batch(db: AsyncSession = Depends(get_db)):
    batch = await open_batch(db)
    return {**_batch_to_response(batch), "catalog": REQUIRED_DOCS_STRUCTURE}


@router.get("/batches/{batch_id}", response_model=dict)
async def get_batch_status(batch_id: str, db: AsyncSession = Depends(get_db)):
    batch = await get_batch(db, batch_id)
    if not batch:
        raise HTTPException(status_code=404, detail=MSG_BATCH_NOT_FOUND)
    return _batch_to_response(batch)


@router.post("/batches/{batch_id}/{doc_id}", response_model=dict, status_code=201)
async def upload_document(
    batch_id: str,
    doc_id: str,
    file: UploadFile = File(..., description="PDF, JPEG or PNG, up to 5MB"),
    db: AsyncSession = Depends(get_db),
):
    batch = await _load_open_batch(db, batch_id)
    # One byte past the limit is enough to reject an oversized file.
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    try:
        upload = await record_upload(db, batch, doc_id, file.filename, file.content_type, len(content))
    except DocumentRejected as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _upload_to_response(upload)


@router.post("/batches/{batch_id}/{doc_id}/verify", response_model=dict)
async def verify_document(
    batch_id: str,
    doc_id: str,
    db: AsyncSession = Depends(get_db),
    verifier: StubVerificationService = Depends(get_verification_service),
):
    """Advance the document one verification stage. Clients poll this until Verified."""
    batch = await _load_open_batch(db, batch_id)
    upload = next((d for d in batch.documents if d.doc_id == doc_id), None)
    if not upload:
        raise HTTPException(status_code=404, detail=f"Document {doc_id} not uploaded")
    try:
        await advance_document(db, upload, verifier)
    except InvalidDocumentTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {**_upload_to_response(upload), "batchComplete": is_complete(REQUIRED_DOC_IDS, uploaded_map(batch))}


async def load_complete_batch(db: AsyncSession, batch_id: str) -> DocumentBatch:
    """Batch for a submission; every required document must already be Verified."""
    batch = await _load_open_batch(db, batch_id)
    uploaded = uploaded_map(batch)
    if not is_complete(REQUIRED_DOC_IDS, uploaded):
        missing = [doc_id for doc_id in REQUIRED_DOC_IDS if (uploaded.get(doc_id) or {}).get("status") != "Verified"]
        raise HTTPException(
            status_code=400,
            detail=f"All required documents must be verified before submission. Outstanding: {', '.join(missing)}",
        )
    return batch
