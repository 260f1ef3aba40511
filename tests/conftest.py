import itertools
import os

# Must be set before any application module reads its configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATA_SOURCE"] = "sql"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.data_source import MemoryDataSource, SqlDataSource
from database.init import Base
from enums.property_status import PropertyStatus
from enums.user_role import UserRole
from main import app
from schemas.property_schema import PropertyCreate
from services import auth_service
from services.property_service import PropertyService
from utils.dependencies import get_data_source, token_for

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_user_numbers = itertools.count(1)

PROPERTY_FIELDS = {
    "title": "Sunny Two Bedroom",
    "description": "Bright apartment close to the park.",
    "address": "12 Elm Street",
    "location": {"city": "Austin", "state": "TX", "zipCode": "73301"},
    "price": 1800,
    "bedrooms": 2,
    "bathrooms": 1,
    "area": 900,
    "features": ["Balcony"],
    "propertyType": "Apartment",
}


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def sql_source(db):
    return SqlDataSource(db)


@pytest.fixture(params=["sql", "memory"])
def data_source(request):
    """Runs a test once against each storage backend"""
    if request.param == "memory":
        return MemoryDataSource()
    return request.getfixturevalue("sql_source")


@pytest.fixture
def client(sql_source):
    app.dependency_overrides[get_data_source] = lambda: sql_source
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(data_source, role=UserRole.RENTER.value, approved=None, email=None, name=None):
    email = email or f"{role}{next(_user_numbers)}@example.com"
    return auth_service.create_user(
        data_source,
        name or role.title(),
        email,
        "password123",
        role=role,
        is_approved=approved,
    )


def make_property(data_source, owner, status=None, is_approved=None, **overrides):
    fields = {**PROPERTY_FIELDS, **overrides}
    created = PropertyService().create_property(
        data_source, owner, PropertyCreate.model_validate(fields)
    )
    property_obj = data_source.get_property(created.id)
    if status is not None or is_approved is not None:
        if status is not None:
            property_obj.status = status.value if isinstance(status, PropertyStatus) else status
        if is_approved is not None:
            property_obj.is_approved = is_approved
        property_obj = data_source.save_property(property_obj)
    return property_obj


def auth_header(user):
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def renter(data_source):
    return make_user(data_source, UserRole.RENTER.value, email="renter@example.com", name="Renter")


@pytest.fixture
def owner(data_source):
    return make_user(data_source, UserRole.OWNER.value, approved=True, email="owner@example.com", name="Owner")


@pytest.fixture
def admin(data_source):
    return make_user(data_source, UserRole.ADMIN.value, email="admin@example.com", name="Admin")
