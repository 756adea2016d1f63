"""Synthetic population generator for the application monitor"""

import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from credit_monitor.domain.exceptions import InvalidGenerationRequestError
from credit_monitor.domain.models import (
    STATUSES,
    ApplicationRecord,
    ExplainabilityFactor,
)
from credit_monitor.utils.date_utils import as_utc

APPLICANT_NAMES: Sequence[str] = (
    "John Smith",
    "Sarah Johnson",
    "Michael Brown",
    "Emily Davis",
    "David Wilson",
    "Jessica Garcia",
    "Robert Miller",
    "Ashley Martinez",
    "Christopher Lopez",
    "Amanda Anderson",
)

DEFAULT_RECORD_COUNT = 50
APPLICATION_WINDOW_DAYS = 30


def derive_risk_level(credit_score: int) -> str:
    """
    Map a credit score to a risk level.

    Thresholds:
    - > 700: Low
    - > 600: Medium
    - > 500: High
    - otherwise: Critical
    """
    if credit_score > 700:
        return "Low"
    elif credit_score > 600:
        return "Medium"
    elif credit_score > 500:
        return "High"
    else:
        return "Critical"


def _explainability_factors(rng: random.Random) -> tuple:
    # Recent Inquiries is the only factor that pulls the score down
    return (
        ExplainabilityFactor(
            "Payment History",
            rng.uniform(30, 70),
            "Consistent on-time payments improve credit score",
        ),
        ExplainabilityFactor(
            "Credit Utilization",
            rng.uniform(15, 45),
            "Lower credit utilization is better for score",
        ),
        ExplainabilityFactor(
            "Length of Credit History",
            rng.uniform(10, 30),
            "Longer credit history indicates reliability",
        ),
        ExplainabilityFactor(
            "Credit Mix",
            rng.uniform(5, 20),
            "Diverse credit types show responsible management",
        ),
        ExplainabilityFactor(
            "Recent Inquiries",
            -rng.uniform(5, 15),
            "Recent credit inquiries may lower score temporarily",
        ),
    )


def generate_records(
    count: int = DEFAULT_RECORD_COUNT,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    names: Sequence[str] = APPLICANT_NAMES,
) -> List[ApplicationRecord]:
    """
    Generate a fresh synthetic population of credit applications.

    Ids restart at app_1 on every call. Output depends only on the random
    source and `now`, so a seeded rng gives a reproducible population.

    Ranges (upper bound exclusive unless noted):
    - credit_score: [400, 800)
    - loan_amount: [50k, 550k), income: [30k, 180k)
    - debt_to_income_ratio: [0.1, 0.6), credit_utilization: [0.1, 1.0)
    - employment_history: 1-15, account_age: 1-20, recent_inquiries: 0-9 (inclusive)

    Raises:
        InvalidGenerationRequestError: If count is negative or no names are given
    """
    if count < 0:
        raise InvalidGenerationRequestError(f"Cannot generate {count} records")
    if count and not names:
        raise InvalidGenerationRequestError("Applicant name pool is empty")

    rng = rng or random.Random()
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    window = timedelta(days=APPLICATION_WINDOW_DAYS)

    records = []
    for index in range(count):
        credit_score = rng.randrange(400, 800)
        records.append(
            ApplicationRecord(
                id=f"app_{index + 1}",
                applicant_name=rng.choice(names),
                credit_score=credit_score,
                risk_level=derive_risk_level(credit_score),
                status=rng.choice(STATUSES),
                application_date=now - window * rng.random(),
                loan_amount=rng.randrange(50_000, 550_000),
                income=rng.randrange(30_000, 180_000),
                employment_history=rng.randint(1, 15),
                debt_to_income_ratio=rng.uniform(0.1, 0.6),
                payment_history=rng.uniform(0, 100),
                credit_utilization=rng.uniform(0.1, 1.0),
                account_age=rng.randint(1, 20),
                recent_inquiries=rng.randint(0, 9),
                explainability_factors=_explainability_factors(rng),
            )
        )

    return records
