"""
Application store: submission, listing and status transitions.

Status moves only from Under Review to Approved, Rejected or Revoked; those three are terminal.
"""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models import LoanApplication
from schemas.application import ApplicationSource, ApplicationStatus
from utils.numbers import coerce_int

logger = logging.getLogger(__name__)

REF_ID_PREFIX = "APP-"
REF_ID_ATTEMPTS = 20

TERMINAL_STATUSES = frozenset({ApplicationStatus.APPROVED, ApplicationStatus.REJECTED, ApplicationStatus.REVOKED})
_ALLOWED_TRANSITIONS = {
    ApplicationStatus.UNDER_REVIEW: TERMINAL_STATUSES,
}


class ApplicationNotFound(LookupError):
    pass


class InvalidStatusTransition(ValueError):
    def __init__(self, ref_id: str, current: str, requested: str):
        super().__init__(f"Application {ref_id} is {current}; cannot change to {requested}")
        self.ref_id = ref_id
        self.current = current
        self.requested = requested


def can_transition(current: ApplicationStatus | str, new: ApplicationStatus | str) -> bool:
    return ApplicationStatus(new) in _ALLOWED_TRANSITIONS.get(ApplicationStatus(current), frozenset())


async def _ref_id_taken(session: AsyncSession, ref_id: str) -> bool:
    result = await session.execute(select(LoanApplication.id).where(LoanApplication.ref_id == ref_id))
    return result.first() is not None


async def generate_ref_id(session: AsyncSession) -> str:
    """APP- plus four digits; falls back to a hex suffix once short ids keep colliding."""
    for _ in range(REF_ID_ATTEMPTS):
        ref_id = f"{REF_ID_PREFIX}{1000 + secrets.randbelow(9000)}"
        if not await _ref_id_taken(session, ref_id):
            return ref_id
    return f"{REF_ID_PREFIX}{uuid.uuid4().hex[:10].upper()}"


async def submit_application(
    session: AsyncSession,
    profile: dict[str, Any],
    amount_requested: Any,
    loan_type: str,
    document_ids: list[str],
    source: ApplicationSource = ApplicationSource.WEB,
    tier: str | None = None,
    opportunity_ref_id: str | None = None,
) -> LoanApplication:
    """
    Persist a fully validated application with status Under Review.
    Form numbers are stored as whole rupees. A ref id claimed by a concurrent
    submission between the check and the insert is replaced and the insert retried.
    """
    fields = dict(
        status=ApplicationStatus.UNDER_REVIEW.value,
        source=ApplicationSource(source).value,
        company_name=str(profile["company_name"]).strip(),
        turnover=coerce_int(profile["turnover"]),
        years_trading=coerce_int(profile["years_trading"]),
        sector=profile.get("sector") or "",
        entity_type=profile.get("entity_type"),
        amount_requested=coerce_int(amount_requested),
        loan_type=loan_type,
        tier=tier,
        documents=sorted(document_ids),
        opportunity_ref_id=opportunity_ref_id,
        submitted_date=date.today(),
    )
    for attempt in range(1, REF_ID_ATTEMPTS + 1):
        app = LoanApplication(ref_id=await generate_ref_id(session), **fields)
        try:
            async with session.begin_nested():
                session.add(app)
        except IntegrityError:
            if attempt == REF_ID_ATTEMPTS:
                raise
            logger.warning("Ref id %s was taken before insert; retrying", app.ref_id)
            continue
        break
    await session.refresh(app)
    logger.info("Application %s submitted by %s (%s, %s)", app.ref_id, app.company_name, app.source, loan_type)
    return app


async def list_applications(session: AsyncSession, source: ApplicationSource | str | None = None) -> list[LoanApplication]:
    query = select(LoanApplication).order_by(LoanApplication.id.desc())
    if source is not None:
        query = query.where(LoanApplication.source == ApplicationSource(source).value)
    result = await session.execute(query)
    return list(result.scalars().all())


async def get_application(session: AsyncSession, ref_id: str) -> LoanApplication | None:
    result = await session.execute(select(LoanApplication).where(LoanApplication.ref_id == ref_id))
    return result.scalar_one_or_none()


async def set_status(session: AsyncSession, ref_id: str, new_status: ApplicationStatus | str) -> LoanApplication:
    app = await get_application(session, ref_id)
    if app is None:
        raise ApplicationNotFound(ref_id)
    new_status = ApplicationStatus(new_status)
    if not can_transition(app.status, new_status):
        logger.warning("Rejected transition of %s: %s -> %s", ref_id, app.status, new_status.value)
        raise InvalidStatusTransition(ref_id, app.status, new_status.value)
    previous = app.status
    app.status = new_status.value
    await session.flush()
    await session.refresh(app)
    logger.info("Application %s: %s -> %s", ref_id, previous, new_status.value)
    return app


async def latest_profile(session: AsyncSession, company_name: str | None = None) -> dict[str, Any] | None:
    """
    Profile snapshot of the most recent submission, optionally for one company.
    None until something has been submitted, which keeps legacy matching locked.
    """
    query = select(LoanApplication).order_by(LoanApplication.id.desc()).limit(1)
    if company_name:
        query = query.where(LoanApplication.company_name == company_name.strip())
    result = await session.execute(query)
    app = result.scalar_one_or_none()
    if app is None:
        return None
    return {
        "company_name": app.company_name,
        "turnover": app.turnover,
        "years_trading": app.years_trading,
        "sector": app.sector,
        "entity_type": app.entity_type,
    }


def application_to_response(app: LoanApplication) -> dict[str, Any]:
    """Serialize application to dict with camelCase for the portal client."""
    return {
        "refId": app.ref_id,
        "status": app.status,
        "source": app.source,
        "companyName": app.company_name,
        "turnover": app.turnover,
        "yearsTrading": app.years_trading,
        "sector": app.sector,
        "entityType": app.entity_type,
        "amountRequested": app.amount_requested,
        "loanType": app.loan_type,
        "tier": app.tier,
        "documents": list(app.documents or []),
        "opportunityRefId": app.opportunity_ref_id,
        "date": app.submitted_date.isoformat() if app.submitted_date else None,
        "createdAt": app.created_at.isoformat() if app.created_at else None,
        "updatedAt": app.updated_at.isoformat() if app.updated_at else None,
    }
