"""
Throw Analysis Domain Models

Data structures for representing throw analysis results,
including the release event, kinematic metrics, and injury-risk feedback.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReleaseEvent:
    """
    The frame where the tracked wrist reaches peak speed.

    Peak hand speed is taken as the moment of ball release
    in an overhand throw.
    """
    frame_index: int
    timestamp: float
    peak_speed_px_per_s: float


@dataclass(frozen=True)
class ThrowMetrics:
    """
    Kinematic measurements at the release frame.

    Attributes:
        separation_degrees: Shoulder-line vs hip-line angle (0-180)
        elbow_degrees: Throwing elbow interior angle (0-180)
        estimated_velocity_mph: Ball speed estimate from peak wrist speed
        release_time_seconds: Release frame index times the frame interval
    """
    separation_degrees: float
    elbow_degrees: float
    estimated_velocity_mph: float
    release_time_seconds: float


@dataclass(frozen=True)
class FeedbackItem:
    """
    One detected biomechanical concern and how to fix it.

    Attributes:
        issue: Short name of the problem
        risk: What injury or performance risk it carries
        fix: Coaching cue to correct it
    """
    issue: str
    risk: str
    fix: str

    def to_dict(self) -> dict:
        return {"issue": self.issue, "risk": self.risk, "fix": self.fix}


@dataclass(frozen=True)
class ScoringResult:
    """Form score plus feedback items in rule evaluation order."""
    score: int
    feedback_items: tuple[FeedbackItem, ...] = field(default_factory=tuple)

    @property
    def issues(self) -> list[str]:
        return [item.issue for item in self.feedback_items]


@dataclass(frozen=True)
class ThrowReport:
    """
    Complete analysis of a throw.

    This is the only value returned to the caller on success.
    Metrics are already rounded for display.
    """
    form_score: int
    metrics: ThrowMetrics
    feedback_items: tuple[FeedbackItem, ...]
    release: ReleaseEvent

    def to_dict(self) -> dict:
        """Wire format used by the mobile client."""
        return {
            "form_score": self.form_score,
            "pred_vel_mph": f"{self.metrics.estimated_velocity_mph:.1f}",
            "sep_at_release": int(self.metrics.separation_degrees),
            "elbow_at_release": int(self.metrics.elbow_degrees),
            "release_time": f"{self.metrics.release_time_seconds:.2f}",
            "feedback_items": [item.to_dict() for item in self.feedback_items],
        }
