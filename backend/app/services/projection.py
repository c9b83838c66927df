"""
View projection - turns persisted shipments into the shapes the UI consumes.

Each client role on a shipment is either linked to a saved client row or only
known through the JSON snapshot taken on the form. The two cases are resolved
once per role (`resolve_consignee` / `resolve_exporter`) and rendered from there.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from app.models import Consignee, Exporter, Shipment

SEA_FREIGHT_TYPE = "IMS"


@dataclass(frozen=True)
class Linked:
    entity: Union[Consignee, Exporter]


@dataclass(frozen=True)
class Snapshot:
    record: Dict[str, Any]


ClientRef = Union[Linked, Snapshot]


def _snapshot(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


def resolve_consignee(shipment: Shipment) -> ClientRef:
    if shipment.consignee is not None:
        return Linked(shipment.consignee)
    return Snapshot(_snapshot(shipment.consignee_data))


def resolve_exporter(shipment: Shipment) -> ClientRef:
    if shipment.exporter is not None:
        return Linked(shipment.exporter)
    return Snapshot(_snapshot(shipment.exporter_data))


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def consignee_view(consignee: Consignee, include_documents: bool = True) -> Dict[str, Any]:
    view = {
        "id": str(consignee.id),
        "name": consignee.name,
        "address": consignee.business_address,
        "tin": consignee.tin,
        "brn": consignee.brn,
        "contactPerson": consignee.contact_person,
        "contactNumber": consignee.contact_number,
        "email": consignee.email,
    }
    if include_documents:
        view["documents"] = [
            {
                "id": str(doc.id),
                "name": doc.name,
                "url": doc.file_url,
                "uploadedAt": _isoformat(doc.uploaded_at),
                "isVerified": doc.is_verified,
            }
            for doc in consignee.documents
        ]
    return view


def exporter_view(exporter: Exporter) -> Dict[str, Any]:
    return {
        "id": str(exporter.id),
        "name": exporter.name,
        "address": exporter.business_address,
        "contactPerson": exporter.contact_person,
        "contactNumber": exporter.contact_number,
        "email": exporter.email,
    }


def render_client(ref: ClientRef) -> Dict[str, Any]:
    if isinstance(ref, Snapshot):
        return ref.record
    if isinstance(ref.entity, Consignee):
        return consignee_view(ref.entity)
    return exporter_view(ref.entity)


def client_name(ref: ClientRef) -> Optional[str]:
    if isinstance(ref, Linked):
        return ref.entity.name
    return ref.record.get("name")


def shipment_kind(freight_type: Optional[str]) -> str:
    """'sea' for IMS transactions, 'air' for everything else."""
    return "sea" if freight_type == SEA_FREIGHT_TYPE else "air"


def _text(value: Any) -> Optional[str]:
    return str(value) if value else None


def _list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, list) else []


def build_shipment_detail(shipment: Shipment) -> Dict[str, Any]:
    return {
        "id": shipment.id,
        "reference_number": shipment.reference_number,
        "status": shipment.status,
        "consignee": render_client(resolve_consignee(shipment)),
        "exporter": render_client(resolve_exporter(shipment)),
        "shipment_details": _snapshot(shipment.shipment_details),
        "documents": _list(shipment.documents_data),
        "timeline": _list(shipment.timeline_data),
        "notes": _list(shipment.notes_data),
        "computations": _snapshot(shipment.computations) if shipment.computations is not None else None,
        "cargo": _list(shipment.cargo_data),
        "statement_of_facts": _list(shipment.statement_of_facts_data),
    }


def build_shipment_list_item(shipment: Shipment) -> Dict[str, Any]:
    details = _snapshot(shipment.shipment_details)
    kind = shipment_kind(shipment.freight_type)

    return {
        "id": shipment.id,
        "reference_number": shipment.reference_number,
        "consignee": client_name(resolve_consignee(shipment)) or "N/A",
        "type": kind,
        "bl_number": _text(details.get("bl_number")) if kind == "sea" else None,
        "awb_number": _text(details.get("awb_number")) if kind == "air" else None,
        "status": shipment.status,
        "eta": details.get("eta") or None,
        "completion_date": _isoformat(shipment.completion_date),
        "last_update": _isoformat(shipment.updated_at or shipment.created_at),
        "is_locked": bool(shipment.is_locked),
    }


def build_client_summary(client: Union[Consignee, Exporter]) -> Dict[str, Any]:
    summary = {
        "id": client.id,
        "name": client.name,
        "address": client.business_address or "",
        "contact_person": client.contact_person or "",
        "contact_number": client.contact_number or "",
        "email": client.email or "",
    }
    if isinstance(client, Consignee):
        summary["tin"] = client.tin or ""
        summary["brn"] = client.brn or ""
    return summary
