"""
Analysis Errors

The failures a throw analysis can surface to its caller.
Everything else (degenerate limbs, duplicate timestamps) is absorbed locally.
"""


class AnalysisError(Exception):
    """Base class for errors raised by the throw analysis pipeline."""

    def to_dict(self) -> dict:
        """Structured error value returned to external callers."""
        return {"error": str(self)}


class NoThrowDetected(AnalysisError):
    """
    Peak wrist speed never reached the detection threshold.

    Signals insufficient motion or a bad capture, not a transient fault.
    """

    DEFAULT_MESSAGE = "No throw detected. Try throwing faster/closer."

    def __init__(self, peak_speed: float = 0.0, threshold: float = 0.0, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
        self.peak_speed = peak_speed
        self.threshold = threshold


class MalformedTimelineError(AnalysisError, ValueError):
    """The keypoint timeline violates a structural precondition."""
