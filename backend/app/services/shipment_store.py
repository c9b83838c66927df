"""
Shipment store - creation, lookup and updates of import shipments.
"""
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from uuid import UUID
import random
import logging

from app.config.workflow_loader import (
    get_initial_stage,
    get_terminal_stage,
    is_transition_allowed,
    parse_stage,
)
from app.models import Consignee, Exporter, Shipment
from app.schemas.records import ClientSnapshot, TimelineEvent, dump_records
from app.schemas.shipment import ShipmentFormData, ShipmentUpdate
from app.services.client_registry import find_or_create_consignee, find_or_create_exporter
from app.services.errors import InvalidTransition, NotFound, PersistenceFailure, ValidationFailure
from app.services.revalidation import revalidate_path, shipment_page_path

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "CLEX"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp as stored in timeline entries."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_reference_number(shipment_type: str, now: Optional[datetime] = None) -> str:
    """
    Build a reference like CLEX-IMS25-0042.

    The numeric suffix is random and not checked against existing shipments,
    so two shipments can share a reference.
    """
    now = now or datetime.utcnow()
    year = now.strftime("%y")
    suffix = random.randint(0, 9999)
    return f"{REFERENCE_PREFIX}-{shipment_type}{year}-{suffix:04d}"


def _with_relations(query):
    return query.options(
        selectinload(Shipment.consignee).selectinload(Consignee.documents),
        selectinload(Shipment.exporter),
    )


def get_owned_shipment(db: Session, shipment_id: UUID, owner_id: UUID, with_relations: bool = False) -> Optional[Shipment]:
    query = db.query(Shipment)
    if with_relations:
        query = _with_relations(query)
    return query.filter(Shipment.id == shipment_id, Shipment.user_id == owner_id).first()


def create_shipment(db: Session, shipment_type: str, form_data: ShipmentFormData, owner_id: UUID) -> Shipment:
    """
    Create a shipment together with any new consignee/exporter rows.

    Everything is committed in one transaction; on failure nothing persists.
    """
    initial_stage = get_initial_stage().value
    try:
        consignee_id = find_or_create_consignee(
            db, form_data.consignee, owner_id, form_data.shipment_details
        )
        exporter_id = find_or_create_exporter(db, form_data.exporter, owner_id)

        shipment = Shipment(
            reference_number=generate_reference_number(shipment_type),
            freight_type=shipment_type,
            status=initial_stage,
            consignee_id=consignee_id,
            exporter_id=exporter_id,
            user_id=owner_id,
            consignee_data=form_data.consignee.to_json() if form_data.consignee else {},
            exporter_data=form_data.exporter.to_json() if form_data.exporter else {},
            shipment_details=dict(form_data.shipment_details or {}),
            documents_data=dump_records(form_data.documents),
            timeline_data=[{
                "status": initial_stage,
                "timestamp": utc_timestamp(),
                "description": "Shipment created",
            }],
            notes_data=[],
            computations={},
            cargo_data=[],
            statement_of_facts_data=[],
        )
        db.add(shipment)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailure(str(e)) from e
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created shipment {shipment.reference_number} ({shipment.id}) for user {owner_id}")
    return get_owned_shipment(db, shipment.id, owner_id, with_relations=True)


def list_shipments(db: Session, owner_id: UUID) -> List[Shipment]:
    return (
        db.query(Shipment)
        .options(selectinload(Shipment.consignee), selectinload(Shipment.exporter))
        .filter(Shipment.user_id == owner_id)
        .order_by(Shipment.created_at.desc())
        .all()
    )


def update_shipment_status(
    db: Session,
    shipment_id: UUID,
    status: str,
    owner_id: UUID,
    timeline_event: Optional[TimelineEvent] = None,
) -> Shipment:
    """
    Move a shipment to `status`, appending `timeline_event` when given.

    The status must be a known stage reachable from the current one.
    """
    shipment = get_owned_shipment(db, shipment_id, owner_id)
    if not shipment:
        raise NotFound("Shipment not found")

    target = parse_stage(status)
    if target is None:
        raise ValidationFailure(f"Unknown shipment status: {status}")
    if not is_transition_allowed(shipment.status, target):
        raise InvalidTransition(shipment.status, target.value)

    timeline = list(shipment.timeline_data or [])
    if timeline_event is not None:
        timeline.append(timeline_event.to_json())

    now = datetime.utcnow()
    shipment.status = target.value
    shipment.timeline_data = timeline
    shipment.updated_at = now
    if target == get_terminal_stage() and shipment.completion_date is None:
        shipment.completion_date = now

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailure(str(e)) from e

    logger.info(f"Shipment {shipment_id} moved to {target.value}")
    revalidate_path(shipment_page_path(shipment_id))
    return shipment


def _resolve_link(db: Session, model, snapshot: ClientSnapshot, current_id: Optional[UUID], owner_id: UUID) -> Optional[UUID]:
    """Return the saved client id named by the snapshot, or keep the current link."""
    if not snapshot.id:
        return current_id
    try:
        client_id = UUID(str(snapshot.id))
    except ValueError:
        return current_id
    client = db.query(model).filter(model.id == client_id, model.user_id == owner_id).first()
    return client.id if client else current_id


def update_shipment_details(db: Session, shipment_id: UUID, updates: ShipmentUpdate, owner_id: UUID) -> Shipment:
    """
    Overwrite each JSON field present in `updates`; fields not given are left alone.

    There is no merge with the stored value and no concurrency check.
    """
    shipment = get_owned_shipment(db, shipment_id, owner_id)
    if not shipment:
        raise NotFound("Shipment not found")

    provided = {
        name for name in updates.model_fields_set
        if getattr(updates, name) is not None
    }
    changes: Dict[str, Any] = {}

    if "consignee" in provided:
        changes["consignee_id"] = _resolve_link(db, Consignee, updates.consignee, shipment.consignee_id, owner_id)
        changes["consignee_data"] = updates.consignee.to_json()
    if "exporter" in provided:
        changes["exporter_id"] = _resolve_link(db, Exporter, updates.exporter, shipment.exporter_id, owner_id)
        changes["exporter_data"] = updates.exporter.to_json()
    if "shipment_details" in provided:
        changes["shipment_details"] = dict(updates.shipment_details)
    if "documents" in provided:
        changes["documents_data"] = dump_records(updates.documents)
    if "timeline" in provided:
        changes["timeline_data"] = dump_records(updates.timeline)
    if "notes" in provided:
        changes["notes_data"] = dump_records(updates.notes)
    if "cargo" in provided:
        changes["cargo_data"] = dump_records(updates.cargo)
    if "statement_of_facts" in provided:
        changes["statement_of_facts_data"] = dump_records(updates.statement_of_facts)

    for column, value in changes.items():
        setattr(shipment, column, value)
    shipment.updated_at = datetime.utcnow()

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailure(str(e)) from e

    logger.info(f"Updated shipment {shipment_id}: {sorted(changes)}")
    revalidate_path(shipment_page_path(shipment_id))
    db.expire_all()
    return get_owned_shipment(db, shipment_id, owner_id, with_relations=True)
