import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, Response

from config import get_rules
from schemas.application import ApplicantSchema
from schemas.rules import RuleConfig
from services.eligibility import ProfileValidationError, evaluate
from services.reports import rejection_report_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["eligibility"])


def validation_error_response(exc: ProfileValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


@router.get("/rules", response_model=dict)
async def get_rule_table(rules: RuleConfig = Depends(get_rules)):
    return rules.to_response()


@router.post("/eligibility", response_model=dict)
async def check_eligibility(body: ApplicantSchema, rules: RuleConfig = Depends(get_rules)):
    try:
        result = evaluate(body.model_dump(), rules)
    except ProfileValidationError as e:
        return validation_error_response(e)
    if not result.eligible:
        logger.info("Eligibility check failed for %r: %s", body.company_name, result.reason.value)
    return {
        "eligible": result.eligible,
        "tier": result.tier,
        "reason": result.reason.value if result.reason else None,
        "message": result.message,
    }


@router.post("/eligibility/report")
async def download_rejection_report(body: ApplicantSchema, rules: RuleConfig = Depends(get_rules)):
    """Re-run the check and return the rejection report as a PDF download."""
    try:
        result = evaluate(body.model_dump(), rules)
    except ProfileValidationError as e:
        return validation_error_response(e)
    if result.eligible:
        raise HTTPException(status_code=400, detail="Applicant is eligible; there is nothing to report.")
    pdf = rejection_report_pdf(body.company_name.strip(), result)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="Rejection_Report.pdf"'},
    )
