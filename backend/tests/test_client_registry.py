import uuid

from app.models import Consignee, Exporter
from app.schemas.client import ClientCreate
from app.schemas.records import ClientSnapshot
from app.services.client_registry import (
    create_client,
    find_or_create_consignee,
    find_or_create_exporter,
    list_saved_clients,
)


def test_consignee_matches_on_tin_even_when_name_differs(db_session, user):
    first = find_or_create_consignee(
        db_session, ClientSnapshot(name="Acme Trading", tin="123-456"), user.id
    )
    second = find_or_create_consignee(
        db_session, ClientSnapshot(name="Acme Trading Corp", tin="123-456"), user.id
    )
    db_session.commit()

    assert first == second
    assert db_session.query(Consignee).count() == 1


def test_consignee_matches_on_name_when_tin_differs(db_session, user):
    first = find_or_create_consignee(db_session, ClientSnapshot(name="Acme", tin="111"), user.id)
    second = find_or_create_consignee(db_session, ClientSnapshot(name="Acme", tin="222"), user.id)
    assert first == second


def test_consignee_matching_is_scoped_to_owner(db_session, user, other_user):
    mine = find_or_create_consignee(db_session, ClientSnapshot(name="Acme", tin="111"), user.id)
    theirs = find_or_create_consignee(db_session, ClientSnapshot(name="Acme", tin="111"), other_user.id)
    assert mine != theirs


def test_blank_tins_do_not_match_each_other(db_session, user):
    first = find_or_create_consignee(db_session, ClientSnapshot(name="Acme", tin=""), user.id)
    second = find_or_create_consignee(db_session, ClientSnapshot(name="Harbor Foods", tin=""), user.id)
    db_session.commit()

    assert first != second
    assert db_session.query(Consignee).count() == 2


def test_new_consignee_takes_contact_from_shipment_details(db_session, user):
    consignee_id = find_or_create_consignee(
        db_session,
        ClientSnapshot(name="Blue Harbor", address="Pier 4"),
        user.id,
        {"contact_person": "Dana Cruz", "contact_number": "0917-000-0000"},
    )
    db_session.commit()

    consignee = db_session.query(Consignee).filter(Consignee.id == consignee_id).one()
    assert consignee.registered_name == "Blue Harbor"
    assert consignee.business_address == "Pier 4"
    assert consignee.contact_person == "Dana Cruz"
    assert consignee.contact_number == "0917-000-0000"
    assert consignee.tin == ""
    assert consignee.brn == ""
    assert consignee.email == ""


def test_no_consignee_input_is_a_no_op(db_session, user):
    assert find_or_create_consignee(db_session, None, user.id) is None
    assert find_or_create_exporter(db_session, None, user.id) is None
    assert db_session.query(Consignee).count() == 0


def test_exporter_with_same_name_but_new_address_creates_new_row(db_session, user):
    first = find_or_create_exporter(
        db_session, ClientSnapshot(name="Shenzhen Parts", address="Bao'an"), user.id
    )
    second = find_or_create_exporter(
        db_session, ClientSnapshot(name="Shenzhen Parts", address="Longgang"), user.id
    )
    db_session.commit()

    assert first != second
    assert db_session.query(Exporter).count() == 2


def test_exporter_with_same_name_and_address_is_reused(db_session, user):
    first = find_or_create_exporter(
        db_session, ClientSnapshot(name="Shenzhen Parts", address="Bao'an"), user.id
    )
    second = find_or_create_exporter(
        db_session, ClientSnapshot(name="Shenzhen Parts", address="Bao'an"), user.id
    )
    assert first == second


def test_list_saved_clients_newest_first(db_session, user):
    for name in ("Older", "Newer"):
        create_client(db_session, ClientCreate(type="exporter", name=name, address="X"), user.id)

    names = [c["name"] for c in list_saved_clients(db_session, "exporter", user.id)]
    assert names == ["Newer", "Older"]


def test_list_saved_clients_unknown_type_is_empty(db_session, user):
    assert list_saved_clients(db_session, "forwarder", user.id) == []


def test_list_clients_endpoint_shapes(client, auth_headers):
    r = client.post(
        "/api/clients/",
        json={"type": "consignee", "name": "Acme", "address": "Makati", "tin": "9"},
        headers=auth_headers,
    )
    assert r.json()["success"] is True
    client.post(
        "/api/clients/",
        json={"type": "exporter", "name": "Osaka Steel", "address": "Osaka"},
        headers=auth_headers,
    )

    consignees = client.get("/api/clients/?type=consignee", headers=auth_headers).json()
    exporters = client.get("/api/clients/?type=exporter", headers=auth_headers).json()

    assert consignees[0]["name"] == "Acme"
    assert consignees[0]["tin"] == "9"
    assert consignees[0]["brn"] == ""
    assert consignees[0]["contactPerson"] == ""
    assert exporters[0]["address"] == "Osaka"
    assert "tin" not in exporters[0]


def test_list_clients_hides_other_users_clients(client, auth_headers, other_headers):
    client.post(
        "/api/clients/",
        json={"type": "consignee", "name": "Acme", "address": "Makati"},
        headers=other_headers,
    )
    assert client.get("/api/clients/?type=consignee", headers=auth_headers).json() == []


def test_create_client_returns_client(client, auth_headers):
    r = client.post(
        "/api/clients/",
        json={
            "type": "consignee",
            "name": "Acme",
            "address": "Makati",
            "contactPerson": "Lee",
            "email": "ops@acme.test",
        },
        headers=auth_headers,
    )
    body = r.json()
    assert r.status_code == 200
    assert body["success"] is True
    assert body["client"]["type"] == "consignee"
    assert body["client"]["registeredName"] == "Acme"
    assert body["client"]["contactPerson"] == "Lee"
    uuid.UUID(body["client"]["id"])


def test_create_client_failure_is_reported(client, auth_headers, monkeypatch):
    from app.api import clients as clients_api

    def boom(*args, **kwargs):
        raise RuntimeError("database is down")

    monkeypatch.setattr(clients_api, "create_client", boom)
    r = client.post(
        "/api/clients/",
        json={"type": "exporter", "name": "X", "address": "Y"},
        headers=auth_headers,
    )
    assert r.json() == {"success": False, "error": "database is down"}


def test_list_clients_endpoint_failure_is_empty(client, auth_headers, monkeypatch):
    from app.api import clients as clients_api

    def boom(*args, **kwargs):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(clients_api, "list_saved_clients", boom)
    r = client.get("/api/clients/?type=consignee", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == []
