"""Pytest fixtures shared by the contract, notification and dashboard tests."""

import base64
import io
import os
from datetime import datetime

# Point the app at an in-memory database before anything imports it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RESEND_API_KEY"] = ""
os.environ["SUPABASE_URL"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402

from celebrai.database import Base, SessionLocal, engine  # noqa: E402
from celebrai.domain.contracts.schemas import ContractData, QuoteItem  # noqa: E402
from celebrai.main import app  # noqa: E402


@pytest.fixture
def db_session():
    """Fresh schema per test on the shared in-memory engine."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signature_png() -> str:
    """A small PNG signature encoded as a data URL."""
    buffer = io.BytesIO()
    Image.new("RGB", (120, 50), (255, 255, 255)).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode()


@pytest.fixture
def make_contract():
    """Factory for ContractData records with sensible defaults."""

    def _make(**overrides) -> ContractData:
        fields = {
            "clientName": "Maria Silva",
            "clientEmail": "maria@example.com",
            "clientPhone": "(11) 98888-7777",
            "contractType": "party",
            "notes": "Montagem às 14h. Tema: fundo do mar.",
            "quoteItems": [
                QuoteItem(description="Painel redondo 2m", quantity=1, unitPrice=350, totalPrice=350),
                QuoteItem(description="Arco de balões", quantity=2, unitPrice=120.5, totalPrice=241),
            ],
            "totalValue": 591,
            "tenantName": "Bella Arte Festas",
            "createdAt": datetime(2026, 3, 14, 10, 0),
        }
        fields.update(overrides)
        return ContractData(**fields)

    return _make
