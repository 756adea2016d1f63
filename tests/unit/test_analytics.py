"""Unit tests for the analytics aggregator"""

import random
from datetime import datetime, timezone

import pytest

from credit_monitor.domain.analytics import SCORE_BANDS, build_overview, score_band, summarize
from credit_monitor.domain.generator import generate_records
from credit_monitor.domain.models import AnalyticsSummary


def test_summarize_sample_population(sample_records):
    """Test headline figures and distributions"""
    summary = summarize(sample_records, rng=random.Random(1))

    assert summary.has_data is True
    assert summary.total_applications == 5
    assert summary.avg_score == 616  # (760 + 520 + 640 + 450 + 710) / 5
    assert summary.total_loan_value == 850_000
    assert summary.approval_rate == 40  # 2 of 5 approved
    assert summary.risk_distribution == {"Low": 2, "High": 1, "Medium": 1, "Critical": 1}
    assert summary.score_ranges == {
        "Excellent (750+)": 1,
        "Good (700-749)": 1,
        "Fair (650-699)": 0,
        "Poor (600-649)": 1,
        "Very Poor (<600)": 2,
    }


def test_income_score_sample_preserves_order(sample_records):
    """Test correlation sample is one point per record, in order"""
    summary = summarize(sample_records, rng=random.Random(1))

    assert [(p.income, p.credit_score, p.risk_level) for p in summary.income_score_sample] == [
        (r.income, r.credit_score, r.risk_level) for r in sample_records
    ]


def test_summarize_empty_subset_returns_no_data():
    """Test empty input yields the sentinel, not a division error"""
    summary = summarize([])

    assert summary == AnalyticsSummary.no_data()
    assert summary.has_data is False
    assert summary.avg_score is None
    assert summary.approval_rate is None
    assert summary.monthly_trend == []


@pytest.mark.parametrize(
    "score,band",
    [
        (10_000, "Excellent (750+)"),
        (750, "Excellent (750+)"),
        (749, "Good (700-749)"),
        (700, "Good (700-749)"),
        (699, "Fair (650-699)"),
        (650, "Fair (650-699)"),
        (649, "Poor (600-649)"),
        (600, "Poor (600-649)"),
        (599, "Very Poor (<600)"),
        (0, "Very Poor (<600)"),
    ],
)
def test_score_band_boundaries(score, band):
    """Test band edges"""
    assert score_band(score) == band


def test_score_bands_partition_the_domain():
    """Test every score lands in exactly one band"""
    counts = {band: 0 for band in SCORE_BANDS}
    for score in range(0, 1001):
        counts[score_band(score)] += 1
    assert sum(counts.values()) == 1001
    assert all(count > 0 for count in counts.values())


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_counts_are_consistent(seed):
    """Test both distributions sum to the total"""
    records = generate_records(37, rng=random.Random(seed))
    summary = summarize(records, rng=random.Random(seed))

    assert sum(summary.risk_distribution.values()) == summary.total_applications == 37
    assert sum(summary.score_ranges.values()) == summary.total_applications


def test_monthly_trend_is_simulated_and_independent_of_subset(sample_records):
    """Test trend shape, labels, and that it ignores the records"""
    now = datetime(2024, 6, 15, tzinfo=timezone.utc)
    full = summarize(sample_records, rng=random.Random(9), now=now)
    partial = summarize(sample_records[:1], rng=random.Random(9), now=now)

    assert [point.month for point in full.monthly_trend] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
    assert all(point.simulated for point in full.monthly_trend)
    assert all(30 <= point.applications < 80 for point in full.monthly_trend)
    assert all(600 <= point.avg_score < 700 for point in full.monthly_trend)
    assert all(60 <= point.approval_rate < 90 for point in full.monthly_trend)
    assert full.monthly_trend == partial.monthly_trend


def test_build_overview(sample_records):
    """Test dashboard headline figures and recent ordering"""
    overview = build_overview(sample_records, recent_limit=3)

    assert overview.total_applications == 5
    assert overview.approved_applications == 2
    assert overview.pending_applications == 1
    assert overview.high_risk_applications == 2  # High + Critical
    assert overview.avg_score == 616
    assert overview.total_loan_value == 850_000
    assert overview.approval_rate == 40.0
    assert overview.under_review_applications == 1
    assert overview.rejected_applications == 1
    assert overview.status_distribution == {"Pending": 1, "Approved": 2, "Rejected": 1, "Under Review": 1}
    assert [record.id for record in overview.recent_applications] == ["app_1", "app_5", "app_3"]


def test_build_overview_empty():
    """Test overview of an empty population"""
    overview = build_overview([])

    assert overview.total_applications == 0
    assert overview.avg_score is None
    assert overview.approval_rate is None
    assert overview.recent_applications == []
    assert sum(overview.status_distribution.values()) == 0
