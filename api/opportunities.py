from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.documents import load_complete_batch
from config import get_rules
from database import get_db
from models import LegacyOpportunity
from schemas.application import ApplicationSource, LegacyApply
from schemas.eligibility import LegacyFilter, LegacySort, Verdict
from schemas.rules import RuleConfig
from services.applications import application_to_response, latest_profile, submit_application
from services.eligibility import classify_tier
from services.legacy_matcher import annotate, filter_and_sort, match_eligibility

router = APIRouter(prefix="/api/opportunities", tags=["opportunities"])

MSG_LOCKED = "You must submit a regular application first to verify your profile."


def _opportunity_to_dict(o: LegacyOpportunity) -> dict[str, Any]:
    return {
        "refId": o.ref_id,
        "companyName": o.company_name,
        "sector": o.sector,
        "amountRequested": o.amount_requested,
        "requiredDocCategories": list(o.required_doc_categories or []),
        "loanType": o.loan_type,
        "date": o.recorded_on.isoformat() if o.recorded_on else None,
    }


@router.get("", response_model=dict)
async def list_opportunities(
    filter: LegacyFilter = Query(LegacyFilter.ALL),
    sort: LegacySort = Query(LegacySort.NONE),
    company_name: Optional[str] = Query(None, alias="companyName"),
    db: AsyncSession = Depends(get_db),
):
    """Legacy records with a verdict against the applicant's latest submitted profile."""
    result = await db.execute(select(LegacyOpportunity).order_by(LegacyOpportunity.id))
    records = [_opportunity_to_dict(o) for o in result.scalars().all()]
    profile = await latest_profile(db, company_name)
    view = filter_and_sort(records, profile, filter, sort)
    return {
        "unlocked": profile is not None,
        "profile": {"companyName": profile["company_name"], "turnover": profile["turnover"]} if profile else None,
        "filter": filter.value,
        "sort": sort.value,
        "data": annotate(view, profile),
    }


@router.get("/{ref_id}", response_model=dict)
async def get_opportunity(ref_id: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(LegacyOpportunity).where(LegacyOpportunity.ref_id == ref_id))
    opportunity = result.scalar_one_or_none()
    if not opportunity:
        raise HTTPException(status_code=404, detail="Opportunity not found")
    return _opportunity_to_dict(opportunity)


@router.post("/{ref_id}/apply", status_code=201)
async def apply_to_opportunity(
    ref_id: str,
    body: LegacyApply,
    db: AsyncSession = Depends(get_db),
    rules: RuleConfig = Depends(get_rules),
):
    """Submit an application for a legacy opportunity using the applicant's latest profile."""
    result = await db.execute(select(LegacyOpportunity).where(LegacyOpportunity.ref_id == ref_id))
    opportunity = result.scalar_one_or_none()
    if not opportunity:
        raise HTTPException(status_code=404, detail="Opportunity not found")
    profile = await latest_profile(db, body.company_name)
    if profile is None:
        raise HTTPException(status_code=409, detail=MSG_LOCKED)
    record = _opportunity_to_dict(opportunity)
    if match_eligibility(profile, record) != Verdict.ELIGIBLE:
        raise HTTPException(status_code=422, detail="Loan amount cannot exceed annual turnover.")

    batch = await load_complete_batch(db, body.batch_id)
    app = await submit_application(
        db,
        profile=profile,
        amount_requested=opportunity.amount_requested,
        loan_type=f"Legacy Opportunity ({opportunity.sector} Match)",
        document_ids=[d.doc_id for d in batch.documents],
        source=ApplicationSource.LEGACY,
        tier=classify_tier(profile["turnover"], rules),
        opportunity_ref_id=opportunity.ref_id,
    )
    batch.application_ref_id = app.ref_id
    await db.flush()
    return {"success": True, "refId": app.ref_id, "application": application_to_response(app)}
