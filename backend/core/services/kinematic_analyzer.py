"""
Kinematic Analyzer Service

Finds the ball release in a smoothed keypoint timeline and measures
the body position at that moment.

Release is modeled as the frame of peak throwing-wrist speed.
"""

import logging
from typing import List, Optional

from ..config import AnalysisSettings, get_settings
from ..domain.analysis import ReleaseEvent, ThrowMetrics
from ..domain.errors import NoThrowDetected
from ..domain.pose import Timeline
from .geometry import GeometryEngine

logger = logging.getLogger(__name__)

# meters/second -> miles/hour
MPS_TO_MPH = 2.237


class KinematicAnalyzer:
    """
    Detects release and derives release metrics.

    Wrist speed is a first difference between list-adjacent frames,
    divided by the fixed frame interval. Frames dropped upstream are not
    compensated for, so a gap shows up as one fast step.

    Usage:
        analyzer = KinematicAnalyzer()
        release = analyzer.detect_release(smoothed_timeline)
        metrics = analyzer.compute_metrics(smoothed_timeline, release)
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        self.settings = settings or get_settings()
        self.geometry = GeometryEngine()

    # -------------------------------------------------------------------------
    # Release Detection
    # -------------------------------------------------------------------------

    def wrist_speeds(self, timeline: Timeline) -> List[float]:
        """
        Throwing-wrist speed in px/s for each adjacent frame pair.

        Element i - 1 is the speed between frames i - 1 and i.
        """
        side = self.settings.throwing_side
        interval = self.settings.frame_interval_seconds

        speeds = []
        for i in range(1, len(timeline)):
            prev = timeline[i - 1].wrist(side)
            curr = timeline[i].wrist(side)
            speeds.append(self.geometry.distance(curr, prev) / interval)
        return speeds

    def detect_release(self, timeline: Timeline) -> ReleaseEvent:
        """
        Find the frame of peak wrist speed over the whole timeline.

        The first frame wins on ties.

        Raises:
            NoThrowDetected: If there is no frame pair to measure, or the
                peak is below the no-throw threshold
        """
        threshold = self.settings.no_throw_speed_threshold
        if len(timeline) < 2:
            logger.info(f"No throw detected: only {len(timeline)} frame(s)")
            raise NoThrowDetected(peak_speed=0.0, threshold=threshold)

        peak_speed = 0.0
        release_idx = 0

        for i, speed in enumerate(self.wrist_speeds(timeline), start=1):
            if speed > peak_speed:
                peak_speed = speed
                release_idx = i

        if peak_speed < threshold:
            logger.info(
                f"No throw detected: peak wrist speed {peak_speed:.1f} px/s "
                f"< {threshold:.1f} px/s over {len(timeline)} frames"
            )
            raise NoThrowDetected(peak_speed=peak_speed, threshold=threshold)

        logger.debug(f"Release at frame {release_idx} ({peak_speed:.1f} px/s)")

        return ReleaseEvent(
            frame_index=release_idx,
            timestamp=timeline[release_idx].timestamp,
            peak_speed_px_per_s=peak_speed,
        )

    # -------------------------------------------------------------------------
    # Release Metrics
    # -------------------------------------------------------------------------

    def estimate_velocity_mph(self, peak_speed: float) -> float:
        """
        Convert peak wrist speed (px/s) to an estimated ball speed in mph.

        The correction factor is an empirical heuristic for the peak
        falling between samples, not a physical derivation.
        """
        meters_per_second = peak_speed / self.settings.pixels_per_meter
        return meters_per_second * MPS_TO_MPH * self.settings.velocity_correction_factor

    def compute_metrics(self, timeline: Timeline, release: ReleaseEvent) -> ThrowMetrics:
        """Measure separation, elbow angle and velocity at the release frame."""
        frame = timeline[release.frame_index]

        return ThrowMetrics(
            separation_degrees=self.geometry.shoulder_hip_separation(frame),
            elbow_degrees=self.geometry.elbow_angle(frame, self.settings.throwing_side),
            estimated_velocity_mph=self.estimate_velocity_mph(release.peak_speed_px_per_s),
            release_time_seconds=release.frame_index * self.settings.frame_interval_seconds,
        )

    def analyze(self, timeline: Timeline) -> tuple[ReleaseEvent, ThrowMetrics]:
        """Detect release, then measure it."""
        release = self.detect_release(timeline)
        return release, self.compute_metrics(timeline, release)
