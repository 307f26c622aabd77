from sqlalchemy import JSON, BigInteger, Column, Date, DateTime, Integer, String, func

from database import Base


class LoanApplication(Base):
    __tablename__ = "loan_applications"

    # Insertion order; listings are newest first by this key
    id = Column(Integer, primary_key=True, autoincrement=True)
    ref_id = Column(String(32), unique=True, nullable=False, index=True)
    status = Column(String(32), nullable=False, default="Under Review", index=True)
    source = Column(String(16), nullable=False, default="Web", index=True)
    # Applicant profile snapshot taken at submission
    company_name = Column(String(256), nullable=False, index=True)
    turnover = Column(BigInteger, nullable=False)
    years_trading = Column(Integer, nullable=False)
    sector = Column(String(128), nullable=False)
    entity_type = Column(String(64), nullable=True)
    amount_requested = Column(BigInteger, nullable=False)
    loan_type = Column(String(256), nullable=False, default="Working Capital")
    tier = Column(String(64), nullable=True)
    # Ids of the verified documents submitted with the application
    documents = Column(JSON, nullable=False, default=list)
    opportunity_ref_id = Column(String(32), nullable=True)
    submitted_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
