"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional, Tuple

RISK_LEVELS: Tuple[str, ...] = ("Low", "Medium", "High", "Critical")
STATUSES: Tuple[str, ...] = ("Pending", "Approved", "Rejected", "Under Review")

SCORE_FLOOR = 400
SCORE_CEILING = 800


@dataclass(frozen=True)
class ExplainabilityFactor:
    """One contribution to a record's score explanation"""

    factor: str
    impact: float  # Positive raises the score, negative lowers it
    description: str


@dataclass(frozen=True)
class ApplicationRecord:
    """Credit application tracked by the monitor.

    Records are immutable; the live feed swaps in a copy with a new score.
    risk_level is fixed at generation and is not recomputed when the score moves.
    """

    id: str
    applicant_name: str
    credit_score: int
    risk_level: str
    status: str
    application_date: datetime
    loan_amount: int
    income: int
    employment_history: int
    debt_to_income_ratio: float
    payment_history: float
    credit_utilization: float
    account_age: int
    recent_inquiries: int
    explainability_factors: Tuple[ExplainabilityFactor, ...] = ()


@dataclass(frozen=True)
class FilterCriteria:
    """Active selection over the population, replaced wholesale on update"""

    search_term: str = ""
    risk_level: FrozenSet[str] = frozenset()
    status: FrozenSet[str] = frozenset()
    score_range: Tuple[int, int] = (SCORE_FLOOR, SCORE_CEILING)
    date_range: Optional[Tuple[datetime, datetime]] = None


@dataclass(frozen=True)
class ScoreSample:
    """Income vs score point for correlation plots"""

    income: int
    credit_score: int
    risk_level: str


@dataclass(frozen=True)
class TrendPoint:
    """Monthly trend point. Always simulated, never derived from records."""

    month: str
    applications: int
    avg_score: int
    approval_rate: int
    simulated: bool = True


@dataclass
class AnalyticsSummary:
    """Aggregates derived from a record subset"""

    has_data: bool
    total_applications: int = 0
    avg_score: Optional[int] = None
    total_loan_value: int = 0
    approval_rate: Optional[int] = None
    risk_distribution: Dict[str, int] = field(default_factory=dict)
    score_ranges: Dict[str, int] = field(default_factory=dict)
    income_score_sample: List[ScoreSample] = field(default_factory=list)
    monthly_trend: List[TrendPoint] = field(default_factory=list)

    @classmethod
    def no_data(cls) -> "AnalyticsSummary":
        """Sentinel returned for an empty subset"""
        return cls(has_data=False)


@dataclass
class PortfolioOverview:
    """Headline numbers for the whole population"""

    total_applications: int
    approved_applications: int
    pending_applications: int
    under_review_applications: int
    rejected_applications: int
    status_distribution: Dict[str, int]  # Every status, sums to total_applications
    high_risk_applications: int
    avg_score: Optional[int]
    total_loan_value: int
    approval_rate: Optional[float]
    recent_applications: List[ApplicationRecord]
