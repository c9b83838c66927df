import uuid

import pytest

from app.models import User
from app.services.auth import create_access_token, decode_access_token_subject, resolve_current_user
from app.services.errors import Unauthorized


@pytest.mark.parametrize(
    "path",
    [
        "/api/shipments/",
        f"/api/shipments/{uuid.uuid4()}",
        "/api/clients/?type=consignee",
    ],
)
def test_reads_reject_missing_session(client, path):
    r = client.get(path)
    assert r.status_code == 401


def test_status_update_rejects_missing_session(client):
    r = client.patch(f"/api/shipments/{uuid.uuid4()}/status", json={"status": "DOCUMENTS"})
    assert r.status_code == 401


def test_create_shipment_rejects_missing_session(client):
    r = client.post("/api/shipments/", json={"shipmentType": "IMS", "formData": {}})
    assert r.status_code == 401


def test_invalid_token_is_unauthorized(client):
    r = client.get("/api/shipments/", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401


def test_token_for_unknown_user_is_unauthorized(client):
    token = create_access_token(uuid.uuid4())
    r = client.get("/api/shipments/", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_inactive_user_is_unauthorized(client, db_session, user, auth_headers):
    db_user = db_session.query(User).filter(User.id == user.id).first()
    db_user.active = False
    db_session.commit()

    r = client.get("/api/shipments/", headers=auth_headers)
    assert r.status_code == 401


def test_token_subject_round_trip(user):
    token = create_access_token(user.id)
    assert decode_access_token_subject(token) == str(user.id)


def test_resolve_current_user(db_session, user):
    resolved = resolve_current_user(db_session, create_access_token(user.id))
    assert resolved.id == user.id

    with pytest.raises(Unauthorized):
        resolve_current_user(db_session, None)
