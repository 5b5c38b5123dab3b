"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from aqsati.api.dependencies import get_now
from aqsati.api.main import create_app
from aqsati.infrastructure.database.models import Base
from aqsati.infrastructure.database.session import get_db
from aqsati.domain.models import Client, Installment


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed clock for deterministic status classification
FIXED_NOW = datetime(2024, 4, 20, 15, 30)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return TestClient(app)


@pytest.fixture
def sample_client() -> Client:
    """1200 over 12 months starting 2024-01-01 (100 per month)"""
    return Client(
        id="c1",
        name="Ahmed Ali",
        phone="01012345678",
        total=1200.0,
        months=12,
        start_date="2024-01-01",
    )


@pytest.fixture
def sample_installments() -> list[Installment]:
    """Three monthly payments of 100 for client c1, one of 500 for c2"""
    return [
        Installment(id="i1", client_id="c1", amount=100.0, date=datetime(2024, 1, 1).date()),
        Installment(id="i2", client_id="c1", amount=100.0, date=datetime(2024, 2, 1).date()),
        Installment(id="i3", client_id="c1", amount=100.0, date=datetime(2024, 3, 1).date()),
        Installment(id="i4", client_id="c2", amount=500.0, date=datetime(2024, 3, 5).date()),
    ]
