"""
Client (consignee/exporter) schemas.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from uuid import UUID
from datetime import datetime
from typing import Literal, Optional

ClientType = Literal["consignee", "exporter"]


class ClientCreate(BaseModel):
    type: ClientType
    name: str
    address: str
    registered_name: Optional[str] = None
    tin: Optional[str] = None
    brn: Optional[str] = None
    contact_person: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ClientSummary(BaseModel):
    """Saved client as offered in the shipment form's picker. tin/brn are consignee-only."""
    id: UUID
    name: str
    address: str
    tin: Optional[str] = None
    brn: Optional[str] = None
    contact_person: str
    contact_number: str
    email: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ClientResponse(BaseModel):
    id: UUID
    type: ClientType
    name: str
    address: str
    registered_name: Optional[str] = None
    tin: Optional[str] = None
    brn: Optional[str] = None
    contact_person: str
    contact_number: str
    email: str
    created_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ClientCreateResult(BaseModel):
    success: Literal[True] = True
    client: ClientResponse


class ClientLinkRequest(BaseModel):
    client_id: UUID
    type: ClientType

    class Config:
        alias_generator = to_camel
        populate_by_name = True
