import os

os.environ["DATABASE_URL"] = "sqlite://"  # in-memory database for tests
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from datetime import date

import pytest
from fastapi.testclient import TestClient

from hoodops import models  # noqa: F401
from hoodops.database import Base, SessionLocal, engine
from hoodops.models import Customer, FrequencyType


@pytest.fixture(autouse=True)
def _create_test_db():
    # Fresh tables for every test
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from hoodops.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_customer(db):
    """Factory that stores a customer with sensible defaults"""

    def _make_customer(**overrides):
        data = {
            "name": "Mario's Italian Kitchen",
            "address_line1": "123 Main Street",
            "city": "Houston",
            "state": "TX",
            "zip": "77001",
            "contact_name": "Mario Rossi",
            "contact_phone": "+17135550101",
            "frequency_type": FrequencyType.QUARTERLY,
            "first_service_date": date(2025, 1, 1),
            "assigned_operator": "Baha",
            "sales_partner": "Eren",
        }
        data.update(overrides)
        customer = Customer(**data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    return _make_customer
