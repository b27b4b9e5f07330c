"""
Report Assembler Service

Packages release metrics and scoring output into the final ThrowReport.
"""

from decimal import Decimal, ROUND_HALF_UP

from ..domain.analysis import ReleaseEvent, ScoringResult, ThrowMetrics, ThrowReport


def round_half_up(value: float, places: int = 0) -> float:
    """Round like fixed-point display formatting: ties go up, not to even."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


class ReportAssembler:
    """
    Formats metrics for display and builds the immutable report.

    - velocity: 1 decimal
    - separation / elbow: whole degrees
    - release time: 2 decimals
    """

    @staticmethod
    def format_metrics(metrics: ThrowMetrics) -> ThrowMetrics:
        return ThrowMetrics(
            separation_degrees=round_half_up(metrics.separation_degrees),
            elbow_degrees=round_half_up(metrics.elbow_degrees),
            estimated_velocity_mph=round_half_up(metrics.estimated_velocity_mph, 1),
            release_time_seconds=round_half_up(metrics.release_time_seconds, 2),
        )

    @classmethod
    def assemble(
        cls,
        metrics: ThrowMetrics,
        scoring: ScoringResult,
        release: ReleaseEvent,
    ) -> ThrowReport:
        return ThrowReport(
            form_score=int(scoring.score),
            metrics=cls.format_metrics(metrics),
            feedback_items=tuple(scoring.feedback_items),
            release=release,
        )
