"""Analytics aggregator - summaries derived from a record subset"""

import random
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

from credit_monitor.domain.models import (
    STATUSES,
    AnalyticsSummary,
    ApplicationRecord,
    PortfolioOverview,
    ScoreSample,
    TrendPoint,
)

SCORE_BANDS = (
    "Excellent (750+)",
    "Good (700-749)",
    "Fair (650-699)",
    "Poor (600-649)",
    "Very Poor (<600)",
)

HIGH_RISK_LEVELS = frozenset({"High", "Critical"})
TREND_POINTS = 6


def score_band(credit_score: int) -> str:
    """
    Map a score to exactly one band.

    Bands partition the whole score line:
    - >= 750: Excellent
    - [700, 750): Good
    - [650, 700): Fair
    - [600, 650): Poor
    - < 600: Very Poor
    """
    if credit_score >= 750:
        return SCORE_BANDS[0]
    elif credit_score >= 700:
        return SCORE_BANDS[1]
    elif credit_score >= 650:
        return SCORE_BANDS[2]
    elif credit_score >= 600:
        return SCORE_BANDS[3]
    else:
        return SCORE_BANDS[4]


def _percentage(part: int, whole: int) -> int:
    return round(part / whole * 100)


def simulated_monthly_trend(rng: random.Random, now: datetime) -> List[TrendPoint]:
    """
    Six monthly points of placeholder data, oldest first.

    Values are random and do not come from the record population.
    """
    points = []
    for i in range(TREND_POINTS):
        month = now - timedelta(days=(TREND_POINTS - 1 - i) * 30)
        points.append(
            TrendPoint(
                month=month.strftime("%b"),
                applications=rng.randrange(30, 80),
                avg_score=rng.randrange(600, 700),
                approval_rate=rng.randrange(60, 90),
            )
        )
    return points


def summarize(
    subset: Sequence[ApplicationRecord],
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> AnalyticsSummary:
    """
    Aggregate a subset into distributions and headline figures.

    Returns AnalyticsSummary.no_data() for an empty subset.
    risk_distribution and score_ranges both sum to total_applications.
    """
    if not subset:
        return AnalyticsSummary.no_data()

    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    total = len(subset)

    risk_distribution: Dict[str, int] = dict(Counter(record.risk_level for record in subset))

    score_ranges = {band: 0 for band in SCORE_BANDS}
    for record in subset:
        score_ranges[score_band(record.credit_score)] += 1

    approved = sum(1 for record in subset if record.status == "Approved")

    return AnalyticsSummary(
        has_data=True,
        total_applications=total,
        avg_score=round(sum(record.credit_score for record in subset) / total),
        total_loan_value=sum(record.loan_amount for record in subset),
        approval_rate=_percentage(approved, total),
        risk_distribution=risk_distribution,
        score_ranges=score_ranges,
        income_score_sample=[
            ScoreSample(income=record.income, credit_score=record.credit_score, risk_level=record.risk_level)
            for record in subset
        ],
        monthly_trend=simulated_monthly_trend(rng, now),
    )


def build_overview(records: Sequence[ApplicationRecord], recent_limit: int = 5) -> PortfolioOverview:
    """Headline dashboard figures over the full population"""
    total = len(records)
    status_distribution = {status: 0 for status in STATUSES}
    for record in records:
        status_distribution[record.status] = status_distribution.get(record.status, 0) + 1
    approved = status_distribution["Approved"]
    recent = sorted(records, key=lambda record: record.application_date, reverse=True)[: max(recent_limit, 0)]

    return PortfolioOverview(
        total_applications=total,
        approved_applications=approved,
        pending_applications=status_distribution["Pending"],
        under_review_applications=status_distribution["Under Review"],
        rejected_applications=status_distribution["Rejected"],
        status_distribution=status_distribution,
        high_risk_applications=sum(1 for record in records if record.risk_level in HIGH_RISK_LEVELS),
        avg_score=round(sum(record.credit_score for record in records) / total) if total else None,
        total_loan_value=sum(record.loan_amount for record in records),
        approval_rate=round(approved / total * 100, 1) if total else None,
        recent_applications=recent,
    )
