"""Shared test fixtures for all test modules."""

import contextlib
import uuid

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core import database as db_module
from app.core.auth import hash_password
from app.core.config import settings
from app.core.database import Base, get_db
from app.models.customer import Customer

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# Minimum bcrypt cost keeps password hashing fast in tests
settings.PASSWORD_HASH_ROUNDS = 4

# Well-known customer used across tests
DEFAULT_CUSTOMER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
DEFAULT_CUSTOMER_EMAIL = "maria@example.com"
DEFAULT_CUSTOMER_PASSWORD = "jardim-secreto-1"
DEFAULT_ACTOR = "employee-42"


def _seed_default_customer(session: Session) -> None:
    """Insert the default customer used by all tests."""
    customer = session.query(Customer).filter(Customer.id == DEFAULT_CUSTOMER_ID).first()
    if customer is None:
        customer = Customer(
            id=DEFAULT_CUSTOMER_ID,
            name="Maria Silva",
            email=DEFAULT_CUSTOMER_EMAIL,
            phone="11999990000",
            address="Rua das Flores, 10",
            city="São Paulo",
            zip="01000-000",
            password_hash=hash_password(DEFAULT_CUSTOMER_PASSWORD),
        )
        session.add(customer)
        session.commit()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = ON"))

    session = _TestSessionLocal()
    try:
        _seed_default_customer(session)
    finally:
        session.close()

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct service and repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def customer_id():
    """Return the default customer ID for tests."""
    return DEFAULT_CUSTOMER_ID


def make_user_info(**overrides):  # type: ignore[no-untyped-def]
    """Checkout contact details as the storefront sends them."""
    data = {
        "name": "Maria Silva",
        "email": DEFAULT_CUSTOMER_EMAIL,
        "phone": "11999990000",
        "address": "Rua das Flores, 10",
        "city": "São Paulo",
        "zip": "01000-000",
        "payment_method": "pix",
    }
    data.update(overrides)
    return data


def make_item(**overrides):  # type: ignore[no-untyped-def]
    data = {
        "product_id": "prod-1",
        "name": "Vaso de cerâmica",
        "price": "45.00",
        "quantity": 2,
        "category": "vasos",
    }
    data.update(overrides)
    return data
