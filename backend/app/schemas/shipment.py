"""
Shipment schemas.
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from uuid import UUID
from typing import Any, Dict, List, Literal, Optional
from app.schemas.records import (
    CargoItem,
    ClientSnapshot,
    DocumentEntry,
    Note,
    StatementOfFactsEntry,
    TimelineEvent,
)


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ShipmentFormData(CamelModel):
    consignee: Optional[ClientSnapshot] = None
    exporter: Optional[ClientSnapshot] = None
    shipment_details: Optional[Dict[str, Any]] = None
    documents: Optional[List[DocumentEntry]] = None


class ShipmentCreate(CamelModel):
    # Freight/transaction code, e.g. "IMS" (sea) or "IAS" (air)
    shipment_type: str = Field(..., pattern=r"^[A-Z0-9]{2,6}$")
    form_data: ShipmentFormData = Field(default_factory=ShipmentFormData)


class ShipmentUpdate(CamelModel):
    """Partial update; every field given replaces the stored value wholesale."""
    consignee: Optional[ClientSnapshot] = None
    exporter: Optional[ClientSnapshot] = None
    shipment_details: Optional[Dict[str, Any]] = None
    documents: Optional[List[DocumentEntry]] = None
    timeline: Optional[List[TimelineEvent]] = None
    notes: Optional[List[Note]] = None
    cargo: Optional[List[CargoItem]] = None
    statement_of_facts: Optional[List[StatementOfFactsEntry]] = None


class StatusUpdate(CamelModel):
    status: str
    timeline_event: Optional[TimelineEvent] = None


class ShipmentListItem(CamelModel):
    id: UUID
    reference_number: str
    consignee: str
    type: Literal["sea", "air"]
    bl_number: Optional[str] = None
    awb_number: Optional[str] = None
    status: str
    eta: Optional[Any] = None
    completion_date: Optional[str] = None
    last_update: str
    is_locked: bool


class ShipmentDetail(CamelModel):
    id: UUID
    reference_number: str
    status: str
    consignee: Optional[Dict[str, Any]] = None
    exporter: Optional[Dict[str, Any]] = None
    shipment_details: Dict[str, Any]
    documents: List[Dict[str, Any]]
    timeline: List[Dict[str, Any]]
    notes: List[Dict[str, Any]]
    computations: Optional[Dict[str, Any]] = None
    cargo: List[Dict[str, Any]]
    statement_of_facts: List[Dict[str, Any]]


class ShipmentCreateResult(CamelModel):
    success: Literal[True] = True
    reference_number: str
    shipment: ShipmentDetail


class ShipmentListResult(CamelModel):
    success: bool
    data: List[ShipmentListItem]


class ShipmentUpdateResult(CamelModel):
    success: Literal[True] = True
    data: ShipmentDetail


class ShipmentLinkResult(CamelModel):
    success: Literal[True] = True
    shipment: ShipmentDetail


class DocumentUploadResult(CamelModel):
    success: bool = True
    file_url: str
    status: str


class ActionFailure(CamelModel):
    success: Literal[False] = False
    error: str
