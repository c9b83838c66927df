"""
User model - the identity every other record is scoped by.
"""
from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
from app.db.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    consignees = relationship("Consignee", back_populates="user", cascade="all, delete-orphan")
    exporters = relationship("Exporter", back_populates="user", cascade="all, delete-orphan")
    shipments = relationship("Shipment", back_populates="user", cascade="all, delete-orphan")
