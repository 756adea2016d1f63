"""Pytest fixtures for testing"""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, List

import pytest
from fastapi.testclient import TestClient

from credit_monitor.api.main import create_app
from credit_monitor.config import Settings
from credit_monitor.domain.models import ApplicationRecord, ExplainabilityFactor
from credit_monitor.infrastructure.store.repository import RecordStore
from credit_monitor.infrastructure.store.session import MonitorSession

BASE_DATE = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record() -> Callable[..., ApplicationRecord]:
    """Factory for hand-built records with sensible defaults"""

    def _make(record_id: str = "app_1", **overrides) -> ApplicationRecord:
        values = dict(
            id=record_id,
            applicant_name="John Smith",
            credit_score=650,
            risk_level="Medium",
            status="Pending",
            application_date=BASE_DATE,
            loan_amount=100_000,
            income=60_000,
            employment_history=5,
            debt_to_income_ratio=0.3,
            payment_history=80.0,
            credit_utilization=0.4,
            account_age=7,
            recent_inquiries=2,
            explainability_factors=(
                ExplainabilityFactor("Payment History", 50.0, "On-time payments"),
                ExplainabilityFactor("Recent Inquiries", -8.0, "Recent inquiries"),
            ),
        )
        values.update(overrides)
        return ApplicationRecord(**values)

    return _make


@pytest.fixture
def sample_records(make_record) -> List[ApplicationRecord]:
    """Small mixed population covering every risk level and status"""
    return [
        make_record("app_1", applicant_name="Sarah Johnson", credit_score=760, risk_level="Low",
                    status="Approved", loan_amount=200_000, income=150_000),
        make_record("app_2", applicant_name="Michael Brown", credit_score=520, risk_level="High",
                    status="Rejected", loan_amount=80_000, income=40_000,
                    application_date=BASE_DATE - timedelta(days=10)),
        make_record("app_3", applicant_name="Emily Davis", credit_score=640, risk_level="Medium",
                    status="Under Review", loan_amount=120_000, income=70_000,
                    application_date=BASE_DATE - timedelta(days=3)),
        make_record("app_4", applicant_name="David Wilson", credit_score=450, risk_level="Critical",
                    status="Pending", loan_amount=300_000, income=35_000,
                    application_date=BASE_DATE - timedelta(days=20)),
        make_record("app_5", applicant_name="Sarah Miller", credit_score=710, risk_level="Low",
                    status="Approved", loan_amount=150_000, income=95_000,
                    application_date=BASE_DATE - timedelta(days=1)),
    ]


@pytest.fixture
def monitor(sample_records) -> MonitorSession:
    """Session over the sample population with a seeded random source"""
    rng = random.Random(7)
    return MonitorSession(RecordStore(sample_records, rng=rng), rng=rng, record_count=20)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(feed_enabled=False, random_seed=1234, record_count=50)


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create FastAPI test client with its own monitor session (feed not started)"""
    app = create_app(test_settings)
    return TestClient(app)
