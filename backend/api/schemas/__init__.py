"""
API Schemas

Pydantic models for request/response validation.
"""

from .pose import (
    KeypointSchema,
    PoseFrameSchema,
    WebSocketMessageType,
    WebSocketMessage,
    FrameAckMessage,
)

from .analysis import (
    ThrowingSideEnum,
    AnalysisConfigSchema,
    AnalyzeTimelineRequest,
    FeedbackItemSchema,
    ThrowReportSchema,
    ThrowAnalysisResponse,
    HealthResponse,
)

__all__ = [
    # Pose schemas
    "KeypointSchema",
    "PoseFrameSchema",
    "WebSocketMessageType",
    "WebSocketMessage",
    "FrameAckMessage",
    # Analysis schemas
    "ThrowingSideEnum",
    "AnalysisConfigSchema",
    "AnalyzeTimelineRequest",
    "FeedbackItemSchema",
    "ThrowReportSchema",
    "ThrowAnalysisResponse",
    "HealthResponse",
]
