"""
Document intake - records uploaded files against a shipment's document checklist.

Upload transport is simulated: a fixed delay followed by a synthetic URL.
"""
import asyncio
import logging
import time
from typing import Any, Dict, List, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.database import settings
from app.models import Shipment
from app.services.errors import NotFound, PersistenceFailure
from app.services.revalidation import revalidate_path, shipment_page_path

logger = logging.getLogger(__name__)

UPLOADED_STATUS = "draft"


async def simulate_transport(shipment_id: UUID, document_type: str, file_name: str) -> str:
    """Stand-in for real storage; returns the URL the file would be served from."""
    if settings.upload_delay_seconds > 0:
        await asyncio.sleep(settings.upload_delay_seconds)
    timestamp = int(time.time() * 1000)
    return f"/simulated-uploads/{shipment_id}/{document_type}-{timestamp}-{file_name}"


def attach_file(documents: List[Dict[str, Any]], document_type: str, file_url: str) -> Tuple[List[Dict[str, Any]], bool]:
    """
    Add `file_url` to the checklist entry named `document_type` and mark it draft.

    Returns the new list and whether an entry matched. No entry is added
    when nothing matches.
    """
    matched = False
    updated = []
    for doc in documents:
        if isinstance(doc, dict) and doc.get("name") == document_type:
            doc = {
                **doc,
                "status": UPLOADED_STATUS,
                "files": list(doc.get("files") or []) + [file_url],
            }
            matched = True
        updated.append(doc)
    return updated, matched


async def record_upload(
    db: Session,
    shipment_id: UUID,
    document_type: str,
    file_name: str,
    owner_id: UUID,
) -> Dict[str, str]:
    shipment = (
        db.query(Shipment)
        .filter(Shipment.id == shipment_id, Shipment.user_id == owner_id)
        .first()
    )
    if not shipment:
        raise NotFound("Shipment not found or unauthorized")

    file_url = await simulate_transport(shipment_id, document_type, file_name)

    documents, matched = attach_file(list(shipment.documents_data or []), document_type, file_url)
    if not matched:
        logger.warning(
            "No checklist entry '%s' on shipment %s; upload %s not attached",
            document_type,
            shipment_id,
            file_url,
        )

    shipment.documents_data = documents
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailure(str(e)) from e

    logger.info("Recorded %s upload for shipment %s: %s", document_type, shipment_id, file_url)
    revalidate_path(shipment_page_path(shipment_id))
    return {"file_url": file_url, "status": UPLOADED_STATUS}
