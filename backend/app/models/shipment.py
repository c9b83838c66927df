"""
Shipment model - an import transaction handled for a client.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean, JSON
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from app.db.database import Base


class ShipmentStage(str, enum.Enum):
    CLIENT_DETAILS = "CLIENT_DETAILS"
    SHIPMENT_DETAILS = "SHIPMENT_DETAILS"
    DOCUMENTS = "DOCUMENTS"
    COMPUTATION = "COMPUTATION"
    PAYMENT = "PAYMENT"
    RELEASE = "RELEASE"
    DELIVERY = "DELIVERY"
    COMPLETED = "COMPLETED"


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONBlob = JSON().with_variant(JSONB(), "postgresql")


class Shipment(Base):
    __tablename__ = "shipments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    consignee_id = Column(UUID(as_uuid=True), ForeignKey("consignees.id"), nullable=True)
    exporter_id = Column(UUID(as_uuid=True), ForeignKey("exporters.id"), nullable=True)

    reference_number = Column(String, nullable=False, index=True)  # e.g. "CLEX-IMS25-0042", not unique
    freight_type = Column(String, nullable=False)  # "IMS" = sea, anything else = air
    status = Column(String, nullable=False)
    is_locked = Column(Boolean, nullable=False, default=False)
    completion_date = Column(DateTime, nullable=True)

    # Snapshots of client data captured when the shipment was created/edited
    consignee_data = Column(JSONBlob, nullable=False, default=dict)
    exporter_data = Column(JSONBlob, nullable=False, default=dict)

    shipment_details = Column(JSONBlob, nullable=False, default=dict)  # bl_number, awb_number, eta, ...
    documents_data = Column(JSONBlob, nullable=False, default=list)
    timeline_data = Column(JSONBlob, nullable=False, default=list)
    notes_data = Column(JSONBlob, nullable=False, default=list)
    computations = Column(JSONBlob, nullable=True)
    cargo_data = Column(JSONBlob, nullable=True)
    statement_of_facts_data = Column(JSONBlob, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="shipments")
    consignee = relationship("Consignee", back_populates="shipments")
    exporter = relationship("Exporter", back_populates="shipments")
