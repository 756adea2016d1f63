"""/v1/applications - population, filtered subset, export, regeneration"""

from fastapi import APIRouter, Depends, HTTPException
from starlette.responses import Response

from credit_monitor.api.dependencies import get_monitor
from credit_monitor.api.v1.schemas import (
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationSchema,
)
from credit_monitor.domain.export import records_to_csv
from credit_monitor.infrastructure.store.session import MonitorSession

router = APIRouter()


def _listing(revision: int, records) -> ApplicationListResponse:
    return ApplicationListResponse(
        revision=revision,
        total=len(records),
        applications=[ApplicationSchema.model_validate(record) for record in records],
    )


@router.get("/applications", response_model=ApplicationListResponse)
def list_applications(monitor: MonitorSession = Depends(get_monitor)):
    """Full population in store order"""
    view = monitor.view()
    return _listing(view.revision, view.records)


@router.get("/applications/filtered", response_model=ApplicationListResponse)
def list_filtered_applications(monitor: MonitorSession = Depends(get_monitor)):
    """Records matching the active filters, in store order"""
    view = monitor.view()
    return _listing(view.revision, view.subset)


@router.get("/applications/export")
def export_filtered_applications(monitor: MonitorSession = Depends(get_monitor)):
    """
    Download the filtered subset as CSV.

    Columns: Application ID, Applicant Name, Credit Score, Risk Level,
    Status, Loan Amount, Application Date
    """
    return Response(
        content=records_to_csv(monitor.get_filtered_records()),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="credit_scores.csv"'},
    )


@router.post("/applications/regenerate", response_model=ApplicationListResponse)
def regenerate_applications(monitor: MonitorSession = Depends(get_monitor)):
    """Replace the population with a fresh synthetic one (ids restart at app_1)"""
    monitor.regenerate()
    view = monitor.view()
    return _listing(view.revision, view.records)


@router.get("/applications/{record_id}", response_model=ApplicationResponse)
def get_application(record_id: str, monitor: MonitorSession = Depends(get_monitor)):
    """Single application with its explainability factors"""
    view = monitor.view()
    record = next((record for record in view.records if record.id == record_id), None)
    if record is None:
        raise HTTPException(status_code=404, detail="Application not found")

    return ApplicationResponse(
        revision=view.revision,
        application=ApplicationSchema.model_validate(record),
    )
