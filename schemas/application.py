from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class ApplicationStatus(str, Enum):
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    REVOKED = "Revoked"


class ApplicationSource(str, Enum):
    WEB = "Web"
    LEGACY = "Legacy"


# Numbers arrive from form inputs: blank strings, formatted strings and fractions are all possible.
FormNumber = Union[int, float, str, None]


class ApplicantSchema(BaseModel):
    """
    Applicant profile as entered on the intake form.
    Fields are loosely typed on purpose: the rule evaluator reports the first
    invalid field in a fixed order instead of failing request parsing.
    """
    company_name: Optional[str] = Field("", alias="companyName")
    turnover: FormNumber = None
    amount_requested: FormNumber = Field(None, alias="amountRequested")
    years_trading: FormNumber = Field(None, alias="yearsTrading")
    sector: str = "Retail"
    entity_type: str = Field("Sole Trader", alias="entityType")

    model_config = {"populate_by_name": True}


class ApplicationCreate(BaseModel):
    applicant: ApplicantSchema
    loan_type: str = Field("Working Capital", alias="loanType")
    batch_id: str = Field(..., alias="batchId", description="Document batch holding the verified uploads")

    model_config = {"populate_by_name": True}


class LegacyApply(BaseModel):
    batch_id: str = Field(..., alias="batchId")
    company_name: Optional[str] = Field(None, alias="companyName", description="Whose latest profile to use")

    model_config = {"populate_by_name": True}


class StatusUpdate(BaseModel):
    """Staff decision on an application under review."""
    status: ApplicationStatus
