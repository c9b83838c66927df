"""
Client registry - saved consignees and exporters, scoped per user.

Consignees are matched by tin OR name; exporters by name AND address. The
asymmetry is intentional: an exporter trading from two addresses is kept as
two rows.
"""
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from uuid import UUID
import logging

from app.models import Consignee, Exporter, Shipment
from app.schemas.client import ClientCreate
from app.schemas.records import ClientSnapshot
from app.services.errors import NotFound
from app.services.projection import build_client_summary
from app.services.revalidation import revalidate_path, shipment_page_path

logger = logging.getLogger(__name__)

CLIENT_MODELS = {
    "consignee": Consignee,
    "exporter": Exporter,
}


def find_or_create_consignee(
    db: Session,
    data: Optional[ClientSnapshot],
    owner_id: UUID,
    shipment_details: Optional[Dict[str, Any]] = None,
) -> Optional[UUID]:
    """
    Reuse the owner's consignee with the same tin or name, or create one.

    Contact person/number for a new consignee come from the shipment details
    sub-object of the form. Flushes but does not commit; the caller owns the
    transaction.
    """
    if data is None:
        return None

    criteria = []
    if data.tin:
        criteria.append(Consignee.tin == data.tin)
    if data.name:
        criteria.append(Consignee.name == data.name)

    if criteria:
        existing = (
            db.query(Consignee)
            .filter(Consignee.user_id == owner_id, or_(*criteria))
            .order_by(Consignee.created_at)
            .first()
        )
        if existing:
            logger.info(f"Reusing consignee {existing.id} for '{data.name}'")
            return existing.id

    details = shipment_details or {}
    consignee = Consignee(
        user_id=owner_id,
        name=data.name or "",
        registered_name=data.name,
        business_address=data.address or "",
        tin=data.tin or "",
        brn=data.brn or "",
        contact_person=details.get("contact_person") or "",
        contact_number=details.get("contact_number") or "",
        email="",
    )
    db.add(consignee)
    db.flush()
    logger.info(f"Created consignee {consignee.id} for '{consignee.name}'")
    return consignee.id


def find_or_create_exporter(
    db: Session,
    data: Optional[ClientSnapshot],
    owner_id: UUID,
) -> Optional[UUID]:
    """Reuse the owner's exporter with the same name and address, or create one."""
    if data is None:
        return None

    name = data.name or ""
    address = data.address or ""
    existing = (
        db.query(Exporter)
        .filter(
            Exporter.user_id == owner_id,
            Exporter.name == name,
            Exporter.business_address == address,
        )
        .order_by(Exporter.created_at)
        .first()
    )
    if existing:
        logger.info(f"Reusing exporter {existing.id} for '{name}'")
        return existing.id

    exporter = Exporter(
        user_id=owner_id,
        name=name,
        business_address=address,
        contact_person=data.contact_person or "",
        contact_number=data.contact_number or "",
        email=data.email or "",
    )
    db.add(exporter)
    db.flush()
    logger.info(f"Created exporter {exporter.id} for '{name}'")
    return exporter.id


def list_saved_clients(db: Session, client_type: str, owner_id: UUID) -> List[Dict[str, Any]]:
    """Saved clients of one type, newest first. Failures yield an empty list."""
    model = CLIENT_MODELS.get(client_type)
    if model is None:
        logger.warning(f"Unknown client type requested: {client_type}")
        return []
    try:
        clients = (
            db.query(model)
            .filter(model.user_id == owner_id)
            .order_by(model.created_at.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching {client_type}s: {str(e)}")
        return []
    return [build_client_summary(client) for client in clients]


def create_client(db: Session, payload: ClientCreate, owner_id: UUID) -> Union[Consignee, Exporter]:
    """Create a saved client outside of the shipment flow."""
    if payload.type == "consignee":
        client = Consignee(
            user_id=owner_id,
            name=payload.name,
            business_address=payload.address,
            registered_name=payload.registered_name or payload.name,
            tin=payload.tin or "",
            brn=payload.brn or "",
            contact_person=payload.contact_person or "",
            contact_number=payload.contact_number or "",
            email=payload.email or "",
        )
    else:
        client = Exporter(
            user_id=owner_id,
            name=payload.name,
            business_address=payload.address,
            contact_person=payload.contact_person or "",
            contact_number=payload.contact_number or "",
            email=payload.email or "",
        )
    db.add(client)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(client)
    logger.info(f"Created {payload.type} {client.id} for user {owner_id}")
    return client


def client_response(client: Union[Consignee, Exporter]) -> Dict[str, Any]:
    data = build_client_summary(client)
    data["type"] = "consignee" if isinstance(client, Consignee) else "exporter"
    data["registered_name"] = getattr(client, "registered_name", None)
    data["created_at"] = client.created_at
    return data


def get_owned_client(
    db: Session, client_type: str, client_id: UUID, owner_id: UUID
) -> Optional[Union[Consignee, Exporter]]:
    model = CLIENT_MODELS.get(client_type)
    if model is None:
        return None
    return db.query(model).filter(model.id == client_id, model.user_id == owner_id).first()


def link_client_to_shipment(
    db: Session,
    shipment_id: UUID,
    client_id: UUID,
    client_type: str,
    owner_id: UUID,
) -> Shipment:
    """Point a shipment's consignee/exporter foreign key at a saved client."""
    shipment = (
        db.query(Shipment)
        .filter(Shipment.id == shipment_id, Shipment.user_id == owner_id)
        .first()
    )
    if not shipment:
        raise NotFound("Shipment not found")

    client = get_owned_client(db, client_type, client_id, owner_id)
    if not client:
        raise NotFound(f"{client_type} not found or unauthorized")

    if client_type == "consignee":
        shipment.consignee_id = client.id
    else:
        shipment.exporter_id = client.id
    shipment.updated_at = datetime.utcnow()

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    linked = (
        db.query(Shipment)
        .options(
            selectinload(Shipment.consignee).selectinload(Consignee.documents),
            selectinload(Shipment.exporter),
        )
        .filter(Shipment.id == shipment_id)
        .populate_existing()
        .first()
    )
    revalidate_path(shipment_page_path(shipment_id))
    return linked
