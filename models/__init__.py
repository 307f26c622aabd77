from models.application import LoanApplication
from models.document import DocumentBatch, DocumentUpload
from models.opportunity import LegacyOpportunity

__all__ = [
    "DocumentBatch",
    "DocumentUpload",
    "LegacyOpportunity",
    "LoanApplication",
]
