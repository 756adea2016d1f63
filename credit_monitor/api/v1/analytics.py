"""/v1/analytics - summaries over the filtered subset and the whole population"""

from fastapi import APIRouter, Depends

from credit_monitor.api.dependencies import get_monitor
from credit_monitor.api.v1.schemas import AnalyticsSummaryResponse, OverviewResponse
from credit_monitor.infrastructure.store.session import MonitorSession

router = APIRouter()


@router.get("/analytics/summary", response_model=AnalyticsSummaryResponse)
def get_summary(monitor: MonitorSession = Depends(get_monitor)):
    """
    Analytics over the filtered subset.

    Returns has_data=false with zero totals when no record matches.
    monthly_trend is simulated placeholder data (simulated=true on every point).
    """
    view = monitor.view()
    summary = AnalyticsSummaryResponse.model_validate(view.summary)
    summary.revision = view.revision
    return summary


@router.get("/analytics/overview", response_model=OverviewResponse)
def get_overview(monitor: MonitorSession = Depends(get_monitor)):
    """Dashboard headline figures over the whole population"""
    revision, overview = monitor.overview_view()
    response = OverviewResponse.model_validate(overview)
    response.revision = revision
    return response
