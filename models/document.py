from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from database import Base


class DocumentBatch(Base):
    """Documents collected for one application attempt."""
    __tablename__ = "document_batches"

    id = Column(String(64), primary_key=True, index=True)
    # Set once the batch has been used for a submitted application
    application_ref_id = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    documents = relationship("DocumentUpload", back_populates="batch", cascade="all, delete-orphan")


class DocumentUpload(Base):
    __tablename__ = "document_uploads"
    __table_args__ = (UniqueConstraint("batch_id", "doc_id", name="uq_document_batch_doc"),)

    id = Column(String(64), primary_key=True, index=True)
    batch_id = Column(String(64), ForeignKey("document_batches.id", ondelete="CASCADE"), nullable=False, index=True)
    doc_id = Column(String(64), nullable=False)
    file_name = Column(String(512), nullable=True)
    content_type = Column(String(128), nullable=True)
    size_bytes = Column(Integer, nullable=True)
    status = Column(String(32), nullable=False, default="Pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    batch = relationship("DocumentBatch", back_populates="documents")
