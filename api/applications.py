from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.documents import load_complete_batch
from api.eligibility import validation_error_response
from config import get_rules
from database import get_db
from schemas.application import ApplicationCreate, ApplicationSource, ApplicationStatus, StatusUpdate
from schemas.rules import RuleConfig
from services.applications import (
    ApplicationNotFound,
    InvalidStatusTransition,
    application_to_response,
    get_application,
    list_applications,
    set_status,
    submit_application,
)
from services.eligibility import ProfileValidationError, evaluate
from services.stats import portfolio_stats

router = APIRouter(prefix="/api/applications", tags=["applications"])

MSG_APPLICATION_NOT_FOUND = "Application not found"


async def _transition(db: AsyncSession, ref_id: str, status: ApplicationStatus) -> dict:
    try:
        app = await set_status(db, ref_id, status)
    except ApplicationNotFound:
        raise HTTPException(status_code=404, detail=MSG_APPLICATION_NOT_FOUND)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return application_to_response(app)


@router.get("", response_model=list[dict])
async def list_all_applications(source: Optional[ApplicationSource] = None, db: AsyncSession = Depends(get_db)):
    apps = await list_applications(db, source)
    return [application_to_response(a) for a in apps]


@router.get("/stats", response_model=dict)
async def application_stats(db: AsyncSession = Depends(get_db)):
    return portfolio_stats(await list_applications(db))


@router.get("/{ref_id}", response_model=dict)
async def get_one_application(ref_id: str, db: AsyncSession = Depends(get_db)):
    app = await get_application(db, ref_id)
    if not app:
        raise HTTPException(status_code=404, detail=MSG_APPLICATION_NOT_FOUND)
    return application_to_response(app)


@router.post("", status_code=201)
async def create_application(
    body: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
    rules: RuleConfig = Depends(get_rules),
):
    """Submit a new application. The profile must pass the rule table and every required document must be verified."""
    profile = body.applicant.model_dump()
    try:
        result = evaluate(profile, rules)
    except ProfileValidationError as e:
        return validation_error_response(e)
    if not result.eligible:
        raise HTTPException(status_code=422, detail=result.message)

    batch = await load_complete_batch(db, body.batch_id)
    app = await submit_application(
        db,
        profile=profile,
        amount_requested=body.applicant.amount_requested,
        loan_type=body.loan_type,
        document_ids=[d.doc_id for d in batch.documents],
        source=ApplicationSource.WEB,
        tier=result.tier,
    )
    batch.application_ref_id = app.ref_id
    await db.flush()
    return {"success": True, "refId": app.ref_id, "application": application_to_response(app)}


@router.post("/{ref_id}/status", response_model=dict)
async def update_status(ref_id: str, body: StatusUpdate, db: AsyncSession = Depends(get_db)):
    """Staff decision: approve or reject an application under review."""
    if body.status not in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED):
        raise HTTPException(status_code=400, detail="Staff may only approve or reject an application")
    return await _transition(db, ref_id, body.status)


@router.post("/{ref_id}/revoke", response_model=dict)
async def revoke_application(ref_id: str, db: AsyncSession = Depends(get_db)):
    """Applicant withdraws an application that is still under review."""
    return await _transition(db, ref_id, ApplicationStatus.REVOKED)
