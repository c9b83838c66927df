"""
Saved client (consignee/exporter) API endpoints.
"""
import logging
from typing import List, Union

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.database import get_db
from app.models import User
from app.schemas.client import ClientCreate, ClientCreateResult, ClientResponse, ClientSummary, ClientType
from app.schemas.shipment import ActionFailure
from app.services.client_registry import client_response, create_client, list_saved_clients

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[ClientSummary], response_model_exclude_none=True)
async def list_clients(
    type: ClientType = Query(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Saved clients of one type for the shipment form, newest first."""
    try:
        return list_saved_clients(db, type, user.id)
    except Exception as e:
        logger.error(f"Error fetching saved {type}s: {str(e)}")
        return []


@router.post("/", response_model=Union[ClientCreateResult, ActionFailure], status_code=status.HTTP_200_OK)
async def create_saved_client(
    payload: ClientCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a consignee or exporter outside of shipment creation."""
    try:
        client = create_client(db, payload, user.id)
        return ClientCreateResult(client=ClientResponse(**client_response(client)))
    except Exception as e:
        logger.error(f"Error creating client: {str(e)}")
        return ActionFailure(error=str(e) or "Failed to create client")
