"""
REST API Routes

FastAPI routes for throw analysis.
Handles HTTP requests carrying pre-detected keypoint timelines.
"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from .schemas import (
    AnalysisConfigSchema,
    AnalyzeTimelineRequest,
    FeedbackItemSchema,
    ThrowReportSchema,
    ThrowAnalysisResponse,
    HealthResponse,
)
from core.config import AnalysisSettings, get_settings
from core.domain import MalformedTimelineError, NoThrowDetected, ThrowReport, Timeline
from core.services import ThrowAnalyzer

# Configure logging
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Create router
router = APIRouter()

# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint"
)
async def health_check() -> HealthResponse:
    """
    Check if the API is running.

    Returns:
        Health status and version information
    """
    return HealthResponse(status="healthy", version=API_VERSION)


# =============================================================================
# Throw Analysis
# =============================================================================

@router.post(
    "/analysis/timeline",
    response_model=ThrowAnalysisResponse,
    tags=["Throw Analysis"],
    summary="Analyze a throw from keypoint frames"
)
async def analyze_timeline(request: AnalyzeTimelineRequest) -> ThrowAnalysisResponse:
    """
    Analyze a throw from raw MoveNet keypoints.

    The frames will be:
    1. Validated (17 keypoints each, increasing timestamps)
    2. Smoothed with a fresh filter bank for this request
    3. Searched for the release (peak wrist speed)
    4. Scored and given injury-risk feedback

    Returns:
        Throw report, or success=false with an error when no throw was found.
        A malformed timeline or config is rejected with 422.
    """
    start_time = time.time()

    settings = resolve_settings(request.config)

    try:
        timeline = Timeline.from_frames(frame.to_domain() for frame in request.frames)
    except MalformedTimelineError as e:
        logger.warning(f"Rejected timeline: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    try:
        report = ThrowAnalyzer(settings).analyze_timeline(timeline)
    except NoThrowDetected as e:
        return ThrowAnalysisResponse(
            success=False,
            report=None,
            error=str(e),
            processing_time_ms=(time.time() - start_time) * 1000
        )

    return ThrowAnalysisResponse(
        success=True,
        report=convert_report_to_schema(report),
        error=None,
        processing_time_ms=(time.time() - start_time) * 1000
    )


# =============================================================================
# Helper Functions
# =============================================================================

def resolve_settings(config: Optional[AnalysisConfigSchema]) -> AnalysisSettings:
    """Apply request overrides on top of the server settings."""
    settings = get_settings()
    if config is None:
        return settings
    try:
        return settings.with_overrides(**config.overrides())
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


def convert_report_to_schema(report: ThrowReport) -> ThrowReportSchema:
    """Convert domain ThrowReport to API response schema."""
    wire = report.to_dict()
    return ThrowReportSchema(
        form_score=wire["form_score"],
        pred_vel_mph=wire["pred_vel_mph"],
        sep_at_release=wire["sep_at_release"],
        elbow_at_release=wire["elbow_at_release"],
        release_time=wire["release_time"],
        release_frame=report.release.frame_index,
        feedback_items=[FeedbackItemSchema(**item) for item in wire["feedback_items"]],
    )
