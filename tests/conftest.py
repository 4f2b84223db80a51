"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from splitbill_gateway.api.main import create_app
from splitbill_gateway.domain.models import Expense, Member


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def trio() -> list[Member]:
    """Three members in display order"""
    return [Member("a", "Alice"), Member("b", "Bob"), Member("c", "Carol")]


@pytest.fixture
def road_trip_expenses() -> list[Expense]:
    """Hotel, dinner and gas shared by all three members"""
    return [
        Expense("hotel", "Hotel", 1_500_000, payer_id="b", participant_ids=("a", "b", "c")),
        Expense("dinner", "Dinner", 600_000, payer_id="a", participant_ids=("a", "b", "c")),
        Expense("gas", "Gas", 500_000, payer_id="b", participant_ids=("a", "b", "c")),
    ]


@pytest.fixture
def road_trip_payload() -> dict:
    """JSON snapshot of the road trip group"""
    return {
        "members": [
            {"id": "a", "name": "Alice"},
            {"id": "b", "name": "Bob"},
            {"id": "c", "name": "Carol"},
        ],
        "expenses": [
            {"id": "hotel", "description": "Hotel", "amount": 1_500_000, "payer_id": "b", "participant_ids": ["a", "b", "c"]},
            {"id": "dinner", "description": "Dinner", "amount": 600_000, "payer_id": "a", "participant_ids": ["a", "b", "c"]},
            {"id": "gas", "description": "Gas", "amount": 500_000, "payer_id": "b", "participant_ids": ["a", "b", "c"]},
        ],
    }
