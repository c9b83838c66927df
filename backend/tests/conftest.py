import os
import tempfile

# Environment must be set before any app import reads settings
_TEST_DB_PATH = os.path.join(tempfile.gettempdir(), "test_customs_import.db")
os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{_TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key-1234567890"
os.environ["UPLOAD_DELAY_SECONDS"] = "0"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.db.database import Base, get_db, engine as app_engine
from app.main import app
from app.models import User
from app.services.auth import create_access_token

TEST_ENGINE = app_engine

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_test_database():
    """Fresh tables for every test."""
    Base.metadata.drop_all(bind=TEST_ENGINE)
    Base.metadata.create_all(bind=TEST_ENGINE)
    yield
    Base.metadata.drop_all(bind=TEST_ENGINE)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


def _make_user(db, email):
    user = User(email=email, name=email.split("@")[0])
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db_session):
    return _make_user(db_session, "broker@test.com")


@pytest.fixture
def other_user(db_session):
    return _make_user(db_session, "rival@test.com")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture
def create_shipment(client, auth_headers):
    """POST a shipment and return the response body."""
    def _create(shipment_type="IMS", form_data=None, headers=None):
        r = client.post(
            "/api/shipments/",
            json={"shipmentType": shipment_type, "formData": form_data or {}},
            headers=headers or auth_headers,
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _create
