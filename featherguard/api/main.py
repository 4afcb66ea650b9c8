"""
FeatherGuard - REST API

FastAPI application that drives the window-strike submission workflow and
serves report listings, statistics and the report map.

Run with: uvicorn featherguard.api.main:app --reload
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any

from fastapi import Depends, FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from featherguard import __version__
from featherguard.analysis.statistics import latest_reports
from featherguard.core.config import settings
from featherguard.core.constants import DEFAULT_CONTENT_TYPE, LATEST_REPORTS_LIMIT
from featherguard.core.exceptions import FeatherGuardError, InvalidTransitionError
from featherguard.core.logging import setup_logging
from featherguard.core.models import PhotoUpload, StrikeStatus, WindowType
from featherguard.crowdsource.factory import create_workflow
from featherguard.crowdsource.workflow import StepResult, SubmissionDetails, SubmissionWorkflow
from featherguard.ingestion.geolocation_client import StaticPosition
from featherguard.visualization.map_generator import create_report_map, map_points

logger = setup_logging()

# FastAPI app
app = FastAPI(
    title="FeatherGuard",
    description="Citizen reporting of birds killed or hurt by window strikes",
    version=__version__,
    debug=settings.debug,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Single-user workflow, created on first use
_workflow: Optional[SubmissionWorkflow] = None


def get_workflow() -> SubmissionWorkflow:
    global _workflow
    if _workflow is None:
        _workflow = create_workflow(settings)
    return _workflow


# ============================================================================
# Pydantic Models
# ============================================================================

class SpeciesEditRequest(BaseModel):
    """Species text typed by the user."""
    bird_species: str = Field(..., max_length=200)


class LocationRequest(BaseModel):
    """Position reported by the browser or phone."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class SubmitRequest(BaseModel):
    """Last-step details; status and window type accept values or labels."""
    status: Optional[str] = None
    window_type: Optional[str] = None
    reporter_name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None


class HealthResponse(BaseModel):
    """API health status."""
    status: str
    version: str
    timestamp: str
    backends: Dict[str, str]


def _step_response(workflow: SubmissionWorkflow, result: StepResult) -> Dict[str, Any]:
    if result.notice and result.notice.is_blocking:
        raise HTTPException(status_code=502, detail=result.notice.message)
    return {"step": result.to_dict(), "submission": workflow.to_dict()}


def _parse_details(request: SubmitRequest) -> SubmissionDetails:
    status = None
    if request.status is not None:
        status = StrikeStatus.parse(request.status)
        if status is None:
            raise HTTPException(status_code=422, detail=f"Unknown status: {request.status}")

    window_type = None
    if request.window_type is not None:
        window_type = WindowType.parse(request.window_type)
        if window_type is None:
            raise HTTPException(status_code=422, detail=f"Unknown window type: {request.window_type}")

    return SubmissionDetails(
        status=status,
        window_type=window_type,
        reporter_name=request.reporter_name,
        description=request.description,
    )


# ============================================================================
# System Routes
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check API health status and configured backends."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        backends={
            "object_store": settings.object_store_backend,
            "record_store": settings.record_store_backend,
            "classifier": "gemini" if settings.gemini_api_key else "unconfigured",
        },
    )


# ============================================================================
# Submission Routes
# ============================================================================

@app.get("/api/v1/submission", tags=["Submission"])
async def get_submission(workflow: SubmissionWorkflow = Depends(get_workflow)):
    """Current workflow state and draft."""
    return workflow.to_dict()


@app.post("/api/v1/submission/photo", tags=["Submission"])
async def upload_photo(
    photo: UploadFile = File(...),
    workflow: SubmissionWorkflow = Depends(get_workflow),
):
    """
    Upload the photo and run species recognition.

    Recognition failures still advance the submission; the species field then
    holds a placeholder the user should overwrite.
    """
    data = await photo.read()
    upload = PhotoUpload(
        filename=photo.filename or "photo",
        data=data,
        content_type=photo.content_type or DEFAULT_CONTENT_TYPE,
    )

    try:
        result = await workflow.capture(upload)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _step_response(workflow, result)


@app.put("/api/v1/submission/species", tags=["Submission"])
async def edit_species(
    request: SpeciesEditRequest,
    workflow: SubmissionWorkflow = Depends(get_workflow),
):
    """Correct the suggested species."""
    try:
        workflow.edit_species(request.bird_species)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return workflow.to_dict()


@app.post("/api/v1/submission/location", tags=["Submission"])
async def locate(
    request: Optional[LocationRequest] = None,
    workflow: SubmissionWorkflow = Depends(get_workflow),
):
    """
    Attach a position.

    Send the device's coordinates in the body; without a body the server's
    geolocation provider is asked.
    """
    provider = StaticPosition(request.latitude, request.longitude) if request else None

    try:
        result = await workflow.locate(provider)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _step_response(workflow, result)


@app.post("/api/v1/submission/location/skip", tags=["Submission"])
async def skip_location(workflow: SubmissionWorkflow = Depends(get_workflow)):
    """Continue without a position."""
    try:
        result = workflow.skip_location()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _step_response(workflow, result)


@app.post("/api/v1/submission", tags=["Submission"])
async def submit(
    request: SubmitRequest,
    workflow: SubmissionWorkflow = Depends(get_workflow),
):
    """Store the report. Failed submissions can be retried as-is."""
    details = _parse_details(request)

    try:
        result = await workflow.submit(details)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _step_response(workflow, result)


@app.post("/api/v1/submission/reset", tags=["Submission"])
async def reset(workflow: SubmissionWorkflow = Depends(get_workflow)):
    """Discard the draft and start a new report."""
    return _step_response(workflow, workflow.reset())


# ============================================================================
# Report Routes
# ============================================================================

@app.get("/api/v1/reports", tags=["Reports"])
async def list_reports(
    limit: int = Query(default=LATEST_REPORTS_LIMIT, ge=1, le=500),
    workflow: SubmissionWorkflow = Depends(get_workflow),
):
    """Newest reports."""
    try:
        reports = await workflow.collection.refresh()
    except FeatherGuardError as e:
        raise HTTPException(status_code=502, detail=str(e))

    latest = latest_reports(reports, limit=limit)
    return {
        "total": len(reports),
        "count": len(latest),
        "reports": [r.to_dict() for r in latest],
    }


@app.get("/api/v1/stats", tags=["Statistics"])
async def get_stats(workflow: SubmissionWorkflow = Depends(get_workflow)):
    """Totals by status and the most frequent species."""
    try:
        await workflow.collection.refresh()
    except FeatherGuardError as e:
        raise HTTPException(status_code=502, detail=str(e))

    summary = workflow.collection.summary
    return {"summary": summary.to_dict() if summary else None}


@app.get("/api/v1/map/reports", response_class=HTMLResponse, tags=["Map"])
async def get_reports_map(workflow: SubmissionWorkflow = Depends(get_workflow)):
    """Map of every report with a location."""
    try:
        reports = await workflow.collection.refresh()
    except FeatherGuardError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return create_report_map(map_points(reports))._repr_html_()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
