"""
Shared fixtures: an in-memory SQLite database, a session bound to it, an
API client using that session and bearer tokens for two landlords.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import JWT_ALGORITHM, JWT_AUDIENCE, SUPABASE_JWT_SECRET
from database import get_session
from models import Base, Property, Tenancy, Tenant, TenancyTenant

LANDLORD_ID = "11111111-1111-1111-1111-111111111111"
OTHER_LANDLORD_ID = "22222222-2222-2222-2222-222222222222"


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# pysqlite does not emit BEGIN itself, which breaks SAVEPOINT handling
@event.listens_for(engine, "connect")
def _disable_pysqlite_transactions(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine, "begin")
def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    from main import app

    def _override_get_session():
        yield db

    app.dependency_overrides[get_session] = _override_get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_token(landlord_id: str = LANDLORD_ID, expires_in: int = 3600) -> str:
    claims = {
        "sub": landlord_id,
        "aud": JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, SUPABASE_JWT_SECRET, algorithm=JWT_ALGORITHM)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {make_token(OTHER_LANDLORD_ID)}"}


@pytest.fixture
def make_property(db):
    def _make(landlord_id: str = LANDLORD_ID, **fields):
        values = {"name": "12 Acacia Avenue", "property_category": "btr", "currency": "GBP"}
        values.update(fields)
        prop = Property(landlord_id=landlord_id, **values)
        db.add(prop)
        db.commit()
        return prop
    return _make


@pytest.fixture
def make_tenancy(db):
    def _make(prop, start_date: date, end_date=None, rent_due_day: int = 1,
              rent_amount: Decimal = Decimal("1250.00"), status: str = "pending", **fields):
        tenancy = Tenancy(
            landlord_id=prop.landlord_id,
            property_id=prop.id,
            start_date=start_date,
            end_date=end_date,
            rent_due_day=rent_due_day,
            rent_amount=rent_amount,
            status=status,
            **fields,
        )
        db.add(tenancy)
        db.commit()
        return tenancy
    return _make


@pytest.fixture
def make_tenant(db):
    def _make(tenancy=None, landlord_id: str = LANDLORD_ID, first_name: str = "Ada", last_name: str = "Lovelace"):
        tenant = Tenant(landlord_id=landlord_id, first_name=first_name, last_name=last_name)
        db.add(tenant)
        db.flush()
        if tenancy is not None:
            db.add(TenancyTenant(tenancy_id=tenancy.id, tenant_id=tenant.id, is_primary=True))
        db.commit()
        return tenant
    return _make
