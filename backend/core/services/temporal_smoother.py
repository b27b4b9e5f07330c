"""
Temporal Smoother Service

Causal keypoint denoising with a bank of One Euro filters,
one per (landmark, axis) coordinate.

The cutoff frequency rises with the estimated speed of the signal:
little lag during the fast release phase, strong jitter suppression
while the body is nearly still. Release velocity is later computed as
a first difference, which amplifies any noise left in here.

Reference: Casiez et al., "1 Euro Filter" (CHI 2012).
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..config import AnalysisSettings, get_settings
from ..domain.pose import Landmark, PoseFrame, Timeline

logger = logging.getLogger(__name__)


def smoothing_factor(cutoff: float, dt: float) -> float:
    """Exponential smoothing factor for a cutoff frequency (Hz) and step (s)."""
    r = 2 * math.pi * cutoff * dt
    return r / (r + 1)


@dataclass
class FilterState:
    """Last output of one filter. Private to the smoother."""
    x_prev: float
    dx_prev: float
    t_prev: float


class OneEuroFilter:
    """
    Adaptive low-pass filter for a single scalar signal.

    Usage:
        f = OneEuroFilter(min_cutoff=1.0, beta=0.05)
        smoothed = [f.filter(x, t) for x, t in samples]
    """

    def __init__(self, min_cutoff: float = 1.0, beta: float = 0.05, d_cutoff: float = 1.0):
        if min_cutoff < 0:
            raise ValueError(f"min_cutoff must be >= 0, got {min_cutoff}")
        if beta < 0:
            raise ValueError(f"beta must be >= 0, got {beta}")
        if d_cutoff <= 0:
            raise ValueError(f"d_cutoff must be > 0, got {d_cutoff}")

        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff
        self._state: Optional[FilterState] = None

    def reset(self) -> None:
        """Forget all history."""
        self._state = None

    def filter(self, x: float, t: float) -> float:
        """
        Smooth one sample.

        Args:
            x: Raw value
            t: Sample time in seconds

        Returns:
            Smoothed value. A duplicate or out-of-order timestamp returns
            the previous output and leaves the state untouched.
        """
        state = self._state
        if state is None:
            self._state = FilterState(x_prev=x, dx_prev=0.0, t_prev=t)
            return x

        dt = t - state.t_prev
        if dt <= 0:
            return state.x_prev

        dx = (x - state.x_prev) / dt
        a_d = smoothing_factor(self.d_cutoff, dt)
        dx_hat = a_d * dx + (1 - a_d) * state.dx_prev

        cutoff = self.min_cutoff + self.beta * abs(dx_hat)
        a = smoothing_factor(cutoff, dt)
        x_hat = a * x + (1 - a) * state.x_prev

        state.x_prev = x_hat
        state.dx_prev = dx_hat
        state.t_prev = t
        return x_hat


class TemporalSmoother:
    """
    Bank of 34 independent filters (17 landmarks x 2 axes).

    One instance belongs to exactly one analysis request. Frames must be
    fed in timeline order because every filter is causal.

    Usage:
        smoother = TemporalSmoother()
        smoothed = smoother.smooth(timeline)

        # Or frame by frame (streaming)
        for frame in frames:
            smoothed_frame = smoother.filter_frame(frame)
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        settings = settings or get_settings()
        self._filters: dict[tuple[Landmark, str], OneEuroFilter] = {
            (landmark, axis): OneEuroFilter(
                min_cutoff=settings.min_cutoff,
                beta=settings.beta,
                d_cutoff=settings.d_cutoff,
            )
            for landmark in Landmark
            for axis in ("x", "y")
        }
        self.frames_seen = 0

    def __len__(self) -> int:
        return len(self._filters)

    def reset(self) -> None:
        for f in self._filters.values():
            f.reset()
        self.frames_seen = 0

    def filter_frame(self, frame: PoseFrame) -> PoseFrame:
        """Smooth every keypoint of one frame. Confidence passes through."""
        t = frame.timestamp
        keypoints = tuple(
            kp.with_position(
                self._filters[(kp.landmark, "x")].filter(kp.x, t),
                self._filters[(kp.landmark, "y")].filter(kp.y, t),
            )
            for kp in frame.keypoints
        )
        self.frames_seen += 1
        return PoseFrame(timestamp=t, keypoints=keypoints)

    def smooth(self, timeline: Timeline) -> Timeline:
        """Return a new, denoised timeline."""
        smoothed = Timeline(frames=tuple(self.filter_frame(frame) for frame in timeline))
        logger.debug(f"Smoothed {len(smoothed)} frames with {len(self)} filters")
        return smoothed
