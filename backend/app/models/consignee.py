"""
Consignee model and its verified client documents.
"""
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
from app.db.database import Base


class Consignee(Base):
    __tablename__ = "consignees"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    registered_name = Column(String, nullable=True)
    business_address = Column(String, nullable=False, default="")
    tin = Column(String, nullable=False, default="")  # Tax identification number
    brn = Column(String, nullable=False, default="")  # Business registration number
    contact_person = Column(String, nullable=False, default="")
    contact_number = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="consignees")
    documents = relationship("ConsigneeDocument", back_populates="consignee", cascade="all, delete-orphan")
    shipments = relationship("Shipment", back_populates="consignee")


class ConsigneeDocument(Base):
    """KYC file on record for a consignee, separate from a shipment's document checklist."""
    __tablename__ = "consignee_documents"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    consignee_id = Column(UUID(as_uuid=True), ForeignKey("consignees.id"), nullable=False)
    name = Column(String, nullable=False)
    file_url = Column(String, nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False)
    uploaded_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    consignee = relationship("Consignee", back_populates="documents")
