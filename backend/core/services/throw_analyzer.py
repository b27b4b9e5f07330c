"""
Throw Analyzer Service

High-level service that runs the full analysis pipeline on a keypoint
timeline: smoothing, release detection, scoring and report assembly.

This is the main entry point for analyzing throws.
"""

import logging
from typing import Optional, Union

from ..config import AnalysisSettings, get_settings
from ..domain.analysis import ThrowReport
from ..domain.errors import NoThrowDetected
from ..domain.pose import Timeline
from .kinematic_analyzer import KinematicAnalyzer
from .report_assembler import ReportAssembler
from .scoring_engine import ScoringEngine
from .temporal_smoother import TemporalSmoother

logger = logging.getLogger(__name__)


class ThrowAnalyzer:
    """
    Analyzes a throw from a raw keypoint timeline.

    This service:
    1. Validates the timeline
    2. Smooths every coordinate with a fresh filter bank
    3. Detects release (peak wrist speed)
    4. Measures separation, elbow angle and velocity at release
    5. Scores the throw and builds the report

    Each call gets its own filter bank, so one analyzer can serve many
    requests.

    Usage:
        analyzer = ThrowAnalyzer()
        report = analyzer.analyze_timeline(timeline)
        print(f"Form score: {report.form_score}")

        # Or get the error value instead of an exception
        outcome = ThrowAnalyzer().run(timeline)
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        self.settings = settings or get_settings()
        self.kinematics = KinematicAnalyzer(self.settings)
        self.scoring = ScoringEngine(self.settings)
        self.assembler = ReportAssembler()

    # -------------------------------------------------------------------------
    # Main Analysis Methods
    # -------------------------------------------------------------------------

    def analyze_timeline(self, timeline: Timeline) -> ThrowReport:
        """
        Analyze raw (unsmoothed) keypoints.

        Raises:
            MalformedTimelineError: If the timeline is structurally invalid
            NoThrowDetected: If the wrist never moves fast enough
        """
        timeline.validate()
        smoothed = TemporalSmoother(self.settings).smooth(timeline)
        return self.analyze_smoothed(smoothed)

    def analyze_smoothed(self, smoothed: Timeline) -> ThrowReport:
        """Analyze a timeline that has already been through the smoother."""
        release, metrics = self.kinematics.analyze(smoothed)
        scoring = self.scoring.evaluate(metrics)
        report = self.assembler.assemble(metrics, scoring, release)

        logger.info(
            f"Throw analyzed: score={report.form_score}, "
            f"release frame {release.frame_index}/{len(smoothed)}, "
            f"{report.metrics.estimated_velocity_mph} mph, "
            f"issues={scoring.issues}"
        )
        return report

    def run(self, timeline: Timeline) -> Union[ThrowReport, dict]:
        """
        Analyze and return either the report or a structured error.

        Only NoThrowDetected is turned into a value; a malformed
        timeline still raises.
        """
        try:
            return self.analyze_timeline(timeline)
        except NoThrowDetected as e:
            return e.to_dict()
