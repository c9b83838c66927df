from .client import ClientCreate, ClientSummary, ClientResponse, ClientCreateResult, ClientLinkRequest
from .records import ClientSnapshot, TimelineEvent, DocumentEntry, Note, CargoItem, StatementOfFactsEntry
from .shipment import (
    ShipmentFormData,
    ShipmentCreate,
    ShipmentUpdate,
    StatusUpdate,
    ShipmentListItem,
    ShipmentDetail,
    ShipmentCreateResult,
    ShipmentListResult,
    ShipmentUpdateResult,
    ShipmentLinkResult,
    DocumentUploadResult,
    ActionFailure,
)

__all__ = [
    "ClientCreate",
    "ClientSummary",
    "ClientResponse",
    "ClientCreateResult",
    "ClientLinkRequest",
    "ClientSnapshot",
    "TimelineEvent",
    "DocumentEntry",
    "Note",
    "CargoItem",
    "StatementOfFactsEntry",
    "ShipmentFormData",
    "ShipmentCreate",
    "ShipmentUpdate",
    "StatusUpdate",
    "ShipmentListItem",
    "ShipmentDetail",
    "ShipmentCreateResult",
    "ShipmentListResult",
    "ShipmentUpdateResult",
    "ShipmentLinkResult",
    "DocumentUploadResult",
    "ActionFailure",
]
