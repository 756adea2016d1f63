"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# An empty-string bound clears the date filter
DateBound = Union[datetime, Literal[""]]


class ExplainabilityFactorSchema(BaseModel):
    """Single factor in a score explanation"""

    model_config = ConfigDict(from_attributes=True)

    factor: str
    impact: float
    description: str


class ApplicationSchema(BaseModel):
    """Credit application record"""

    model_config = ConfigDict(from_attributes=True)

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
    explainability_factors: List[ExplainabilityFactorSchema]


class ApplicationListResponse(BaseModel):
    """Response for GET /v1/applications and /v1/applications/filtered"""

    revision: int
    total: int
    applications: List[ApplicationSchema]


class ApplicationResponse(BaseModel):
    """Response for GET /v1/applications/{record_id}"""

    revision: int
    application: ApplicationSchema


class FilterUpdateRequest(BaseModel):
    """Request body for PATCH /v1/filters - omitted fields stay unchanged"""

    model_config = ConfigDict(extra="forbid")

    search_term: Optional[str] = None
    risk_level: Optional[List[str]] = None
    status: Optional[List[str]] = None
    score_range: Optional[Tuple[int, int]] = Field(default=None, description="Inclusive [min, max]")
    date_range: Optional[Tuple[Optional[DateBound], Optional[DateBound]]] = Field(
        default=None,
        description="Inclusive ISO [start, end]; an empty bound clears the date filter",
    )


class FilterCriteriaResponse(BaseModel):
    """Response for /v1/filters"""

    revision: int
    search_term: str
    risk_level: List[str]
    status: List[str]
    score_range: Tuple[int, int]
    date_range: Optional[Tuple[datetime, datetime]] = None
    has_active_filters: bool
    matched: int


class ScoreSampleSchema(BaseModel):
    """Income vs score point"""

    model_config = ConfigDict(from_attributes=True)

    income: int
    credit_score: int
    risk_level: str


class TrendPointSchema(BaseModel):
    """Simulated monthly trend point"""

    model_config = ConfigDict(from_attributes=True)

    month: str
    applications: int
    avg_score: int
    approval_rate: int
    simulated: bool


class AnalyticsSummaryResponse(BaseModel):
    """Response for GET /v1/analytics/summary"""

    model_config = ConfigDict(from_attributes=True)

    revision: int = 0
    has_data: bool
    total_applications: int
    avg_score: Optional[int] = None
    total_loan_value: int
    approval_rate: Optional[int] = None
    risk_distribution: Dict[str, int]
    score_ranges: Dict[str, int]
    income_score_sample: List[ScoreSampleSchema]
    monthly_trend: List[TrendPointSchema]


class OverviewResponse(BaseModel):
    """Response for GET /v1/analytics/overview"""

    model_config = ConfigDict(from_attributes=True)

    revision: int = 0
    total_applications: int
    approved_applications: int
    pending_applications: int
    under_review_applications: int
    rejected_applications: int
    status_distribution: Dict[str, int]
    high_risk_applications: int
    avg_score: Optional[int] = None
    total_loan_value: int
    approval_rate: Optional[float] = None
    recent_applications: List[ApplicationSchema]
