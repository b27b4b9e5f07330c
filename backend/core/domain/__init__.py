"""
Domain Models

Pure data structures representing throw analysis concepts.
No external dependencies - just Python dataclasses and enums.
"""

from .pose import Landmark, Keypoint, PoseFrame, Timeline, ThrowingSide, NUM_LANDMARKS
from .analysis import ReleaseEvent, ThrowMetrics, FeedbackItem, ScoringResult, ThrowReport
from .errors import AnalysisError, NoThrowDetected, MalformedTimelineError

__all__ = [
    "Landmark",
    "Keypoint",
    "PoseFrame",
    "Timeline",
    "ThrowingSide",
    "NUM_LANDMARKS",
    "ReleaseEvent",
    "ThrowMetrics",
    "FeedbackItem",
    "ScoringResult",
    "ThrowReport",
    "AnalysisError",
    "NoThrowDetected",
    "MalformedTimelineError",
]
