"""
Import shipment API endpoints.

Each endpoint keeps the result shape the UI expects for it: creation raises,
reads fall back to empty results, status updates answer true/false, and
detail updates/links return a success flag with an error message.
"""
import logging
from typing import Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, File as FastAPIFile, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.database import get_db
from app.models import User
from app.schemas.client import ClientLinkRequest
from app.schemas.shipment import (
    ActionFailure,
    DocumentUploadResult,
    ShipmentCreate,
    ShipmentCreateResult,
    ShipmentDetail,
    ShipmentListItem,
    ShipmentListResult,
    ShipmentLinkResult,
    ShipmentUpdate,
    ShipmentUpdateResult,
    StatusUpdate,
)
from app.services import shipment_store
from app.services.client_registry import link_client_to_shipment
from app.services.document_intake import record_upload
from app.services.errors import NotFound
from app.services.projection import build_shipment_detail, build_shipment_list_item

logger = logging.getLogger(__name__)
router = APIRouter()


def _parse_shipment_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise NotFound("Shipment not found")


@router.post("/", response_model=ShipmentCreateResult, status_code=status.HTTP_201_CREATED)
async def create_shipment(
    payload: ShipmentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a shipment, saving any new consignee/exporter on the way."""
    try:
        shipment = shipment_store.create_shipment(db, payload.shipment_type, payload.form_data, user.id)
    except Exception as e:
        logger.error(f"Error in shipment creation: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create shipment"
        )

    return ShipmentCreateResult(
        reference_number=shipment.reference_number,
        shipment=ShipmentDetail(**build_shipment_detail(shipment)),
    )


@router.get("/", response_model=ShipmentListResult)
async def list_shipments(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List the caller's shipments, newest first."""
    try:
        shipments = shipment_store.list_shipments(db, user.id)
        items = [ShipmentListItem(**build_shipment_list_item(s)) for s in shipments]
    except Exception as e:
        logger.error(f"Error fetching shipments: {str(e)}")
        return ShipmentListResult(success=False, data=[])

    return ShipmentListResult(success=True, data=items)


@router.get("/{shipment_id}", response_model=Optional[ShipmentDetail])
async def get_shipment(
    shipment_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Full shipment view, or null when missing or not the caller's."""
    try:
        shipment_uuid = _parse_shipment_id(shipment_id)
        shipment = shipment_store.get_owned_shipment(db, shipment_uuid, user.id, with_relations=True)
        if not shipment:
            return None
        return ShipmentDetail(**build_shipment_detail(shipment))
    except Exception as e:
        logger.error(f"Error fetching shipment {shipment_id}: {str(e)}")
        return None


@router.patch("/{shipment_id}/status", response_model=bool)
async def update_shipment_status(
    shipment_id: str,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Move the shipment to a new stage. Answers false when nothing was applied."""
    try:
        shipment_uuid = _parse_shipment_id(shipment_id)
        shipment_store.update_shipment_status(
            db, shipment_uuid, payload.status, user.id, payload.timeline_event
        )
    except Exception as e:
        logger.error(f"Error updating shipment status: {str(e)}")
        return False
    return True


@router.patch("/{shipment_id}", response_model=Union[ShipmentUpdateResult, ActionFailure])
async def update_shipment_details(
    shipment_id: str,
    payload: ShipmentUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Replace the JSON sections present in the payload."""
    try:
        shipment_uuid = _parse_shipment_id(shipment_id)
        shipment = shipment_store.update_shipment_details(db, shipment_uuid, payload, user.id)
    except Exception as e:
        logger.error(f"Error updating shipment: {str(e)}")
        return ActionFailure(error=str(e) or "Failed to update shipment")

    return ShipmentUpdateResult(data=ShipmentDetail(**build_shipment_detail(shipment)))


@router.post("/{shipment_id}/documents", response_model=DocumentUploadResult)
async def upload_document(
    shipment_id: str,
    document_type: str = Form(..., alias="documentType"),
    file: UploadFile = FastAPIFile(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Attach an uploaded file to the checklist entry named `documentType`."""
    try:
        shipment_uuid = _parse_shipment_id(shipment_id)
        result = await record_upload(db, shipment_uuid, document_type, file.filename, user.id)
    except NotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error processing document upload: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process document upload"
        )

    return DocumentUploadResult(success=True, file_url=result["file_url"], status=result["status"])


@router.post("/{shipment_id}/link", response_model=Union[ShipmentLinkResult, ActionFailure])
async def link_client(
    shipment_id: str,
    payload: ClientLinkRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Link a saved consignee or exporter to the shipment."""
    try:
        shipment_uuid = _parse_shipment_id(shipment_id)
        shipment = link_client_to_shipment(db, shipment_uuid, payload.client_id, payload.type, user.id)
    except Exception as e:
        logger.error(f"Error linking client to shipment: {str(e)}")
        return ActionFailure(error=str(e) or "Failed to link client")

    return ShipmentLinkResult(shipment=ShipmentDetail(**build_shipment_detail(shipment)))
