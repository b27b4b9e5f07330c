"""
Analysis API Schemas

Pydantic models for throw analysis API requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from .pose import PoseFrameSchema


class ThrowingSideEnum(str, Enum):
    """Throwing arm for API."""
    LEFT = "left"
    RIGHT = "right"


class AnalysisConfigSchema(BaseModel):
    """
    Per-request overrides for the analysis settings.

    Omitted fields keep the server defaults.
    """
    min_cutoff: Optional[float] = Field(None, ge=0.0, description="Filter responsiveness floor (Hz)")
    beta: Optional[float] = Field(None, ge=0.0, description="Filter speed sensitivity")
    d_cutoff: Optional[float] = Field(None, gt=0.0, description="Derivative smoothing cutoff (Hz)")
    pixels_per_meter: Optional[float] = Field(None, gt=0.0, description="Scale calibration")
    velocity_correction_factor: Optional[float] = Field(None, gt=0.0, description="Peak sampling compensation")
    no_throw_speed_threshold: Optional[float] = Field(None, ge=0.0, description="Minimum peak wrist speed (px/s)")
    frame_interval_seconds: Optional[float] = Field(None, gt=0.0, description="Seconds between frames")
    throwing_side: Optional[ThrowingSideEnum] = Field(None, description="Throwing arm")
    separation_min_degrees: Optional[float] = Field(None, description="Separation below this is flagged")
    elbow_min_degrees: Optional[float] = Field(None, description="Elbow below this is too tight")
    elbow_max_degrees: Optional[float] = Field(None, description="Elbow above this is too straight")
    velocity_advisory_mph: Optional[float] = Field(None, description="Velocity below this gets advice")

    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "pixels_per_meter": 300.0,
                "throwing_side": "left"
            }
        }

    def overrides(self) -> dict:
        """Only the fields the caller actually set."""
        return self.model_dump(exclude_none=True, mode="json")


class AnalyzeTimelineRequest(BaseModel):
    """
    Request to analyze a throw from pre-detected keypoints.

    Frames must be in capture order; they are smoothed as sent.
    """
    frames: List[PoseFrameSchema] = Field(..., description="Raw keypoint frames in capture order")
    config: Optional[AnalysisConfigSchema] = Field(None, description="Setting overrides")


class FeedbackItemSchema(BaseModel):
    """
    One injury-risk finding.
    """
    issue: str = Field(..., description="Detected problem")
    risk: str = Field(..., description="Associated injury risk")
    fix: str = Field(..., description="How to correct it")

    class Config:
        json_schema_extra = {
            "example": {
                "issue": "Arm Casting / Too Straight",
                "risk": "Shoulder impingement and bicep tendonitis.",
                "fix": "Don't lock your arm out. Keep a slight bend to allow for a whip-like action."
            }
        }


class ThrowReportSchema(BaseModel):
    """
    Complete throw report.

    Field names and formats match what the mobile client renders.
    """
    form_score: int = Field(..., ge=0, le=100, description="Form score out of 100")
    pred_vel_mph: str = Field(..., description="Estimated velocity, 1 decimal (mph)")
    sep_at_release: int = Field(..., description="Hip-shoulder separation at release (degrees)")
    elbow_at_release: int = Field(..., description="Throwing elbow angle at release (degrees)")
    release_time: str = Field(..., description="Release time, 2 decimals (seconds)")
    release_frame: int = Field(..., ge=0, description="Index of the release frame")
    feedback_items: List[FeedbackItemSchema] = Field(default_factory=list, description="Findings in rule order")

    class Config:
        json_schema_extra = {
            "example": {
                "form_score": 90,
                "pred_vel_mph": "48.3",
                "sep_at_release": 34,
                "elbow_at_release": 152,
                "release_time": "1.23",
                "release_frame": 37,
                "feedback_items": []
            }
        }


class ThrowAnalysisResponse(BaseModel):
    """
    Response from throw analysis.

    Either `report` or `error` is set.
    """
    success: bool = Field(..., description="Whether a throw was found and scored")
    report: Optional[ThrowReportSchema] = Field(None, description="Throw report")
    error: Optional[str] = Field(None, description="Error message if no throw was found")
    processing_time_ms: float = Field(..., description="Time taken to process in milliseconds")


class HealthResponse(BaseModel):
    """
    Health check response.
    """
    status: str = Field("healthy", description="Service status")
    version: str = Field(..., description="API version")
