"""/v1/filters - read, update, and reset the active filter criteria"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from credit_monitor.api.dependencies import get_monitor, get_request_id
from credit_monitor.api.v1.schemas import FilterCriteriaResponse, FilterUpdateRequest
from credit_monitor.domain.exceptions import InvalidFilterCriteriaError
from credit_monitor.infrastructure.store.session import MonitorSession, SessionView

router = APIRouter()


def _criteria_response(view: SessionView) -> FilterCriteriaResponse:
    criteria = view.criteria
    return FilterCriteriaResponse(
        revision=view.revision,
        search_term=criteria.search_term,
        risk_level=sorted(criteria.risk_level),
        status=sorted(criteria.status),
        score_range=criteria.score_range,
        date_range=criteria.date_range,
        has_active_filters=view.has_active_filters,
        matched=len(view.subset),
    )


@router.get("/filters", response_model=FilterCriteriaResponse)
def get_filters(monitor: MonitorSession = Depends(get_monitor)):
    return _criteria_response(monitor.view())


@router.patch("/filters", response_model=FilterCriteriaResponse)
def update_filters(
    request_body: FilterUpdateRequest,
    request: Request,
    monitor: MonitorSession = Depends(get_monitor),
):
    """
    Merge a partial filter update.

    Only fields present in the body change. A rejected update returns 422
    and leaves the current criteria in place.
    """
    try:
        monitor.update_filters(**request_body.model_dump(exclude_unset=True))
    except InvalidFilterCriteriaError as e:
        logging.warning(f"Invalid filter update: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return _criteria_response(monitor.view())


@router.delete("/filters", response_model=FilterCriteriaResponse)
def reset_filters(monitor: MonitorSession = Depends(get_monitor)):
    """Clear all filters"""
    monitor.reset_filters()
    return _criteria_response(monitor.view())
