import uuid
from datetime import datetime

from app.models import Consignee, ConsigneeDocument, Exporter, Shipment
from app.services.projection import (
    Linked,
    Snapshot,
    build_shipment_detail,
    build_shipment_list_item,
    resolve_consignee,
    resolve_exporter,
    shipment_kind,
)


def _shipment(**overrides):
    values = dict(
        id=uuid.uuid4(),
        reference_number="CLEX-IMS25-0001",
        freight_type="IMS",
        status="CLIENT_DETAILS",
        is_locked=False,
        consignee_data={"name": "Snapshot Consignee"},
        exporter_data={"name": "Snapshot Exporter", "address": "Kobe"},
        shipment_details={},
        documents_data=[],
        timeline_data=[],
        notes_data=[],
        computations=None,
        cargo_data=None,
        statement_of_facts_data=None,
        created_at=datetime(2025, 1, 1),
        updated_at=datetime(2025, 1, 2),
    )
    values.update(overrides)
    return Shipment(**values)


def test_each_role_resolves_independently():
    consignee = Consignee(id=uuid.uuid4(), name="Live Consignee", business_address="Makati",
                          tin="1", brn="2", contact_person="", contact_number="", email="")
    shipment = _shipment(consignee=consignee)

    assert isinstance(resolve_consignee(shipment), Linked)
    assert isinstance(resolve_exporter(shipment), Snapshot)

    detail = build_shipment_detail(shipment)
    assert detail["consignee"]["name"] == "Live Consignee"
    assert detail["consignee"]["address"] == "Makati"
    assert detail["exporter"] == {"name": "Snapshot Exporter", "address": "Kobe"}


def test_linked_exporter_with_snapshot_consignee():
    exporter = Exporter(id=uuid.uuid4(), name="Live Exporter", business_address="Busan",
                        contact_person="Kim", contact_number="", email="")
    detail = build_shipment_detail(_shipment(exporter=exporter))

    assert detail["consignee"] == {"name": "Snapshot Consignee"}
    assert detail["exporter"]["contactPerson"] == "Kim"
    assert "documents" not in detail["exporter"]


def test_linked_consignee_carries_kyc_documents():
    consignee = Consignee(id=uuid.uuid4(), name="Acme", business_address="", tin="", brn="",
                          contact_person="", contact_number="", email="")
    consignee.documents.append(ConsigneeDocument(
        id=uuid.uuid4(), name="Permit", file_url="/files/permit.pdf",
        is_verified=True, uploaded_at=datetime(2025, 2, 3),
    ))
    docs = build_shipment_detail(_shipment(consignee=consignee))["consignee"]["documents"]

    assert docs[0]["name"] == "Permit"
    assert docs[0]["url"] == "/files/permit.pdf"
    assert docs[0]["isVerified"] is True
    assert docs[0]["uploadedAt"] == "2025-02-03T00:00:00"


def test_unset_optional_sections():
    detail = build_shipment_detail(_shipment())
    assert detail["computations"] is None
    assert detail["cargo"] == []
    assert detail["statement_of_facts"] == []


def test_list_item_falls_back_to_na():
    item = build_shipment_list_item(_shipment(consignee_data={}))
    assert item["consignee"] == "N/A"
    assert item["last_update"] == "2025-01-02T00:00:00"


def test_shipment_kind():
    assert shipment_kind("IMS") == "sea"
    assert shipment_kind("IAS") == "air"
    assert shipment_kind(None) == "air"
