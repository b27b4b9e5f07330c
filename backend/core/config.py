"""Analysis configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .domain.pose import ThrowingSide


class AnalysisSettings(BaseSettings):
    """Throw analysis settings loaded from environment variables."""

    # Temporal smoothing (One Euro filter)
    min_cutoff: float = Field(1.0, ge=0.0)
    beta: float = Field(0.05, ge=0.0)  # 0.0 was the legacy default
    d_cutoff: float = Field(1.0, gt=0.0)

    # Kinematics
    frame_interval_seconds: float = Field(1.0 / 30.0, gt=0.0)
    pixels_per_meter: float = Field(250.0, gt=0.0)  # Fixed scale, no calibration
    velocity_correction_factor: float = Field(1.5, gt=0.0)  # Sampling underestimates the true peak
    no_throw_speed_threshold: float = Field(50.0, ge=0.0)  # px/s
    throwing_side: ThrowingSide = ThrowingSide.RIGHT

    # Scoring thresholds
    separation_min_degrees: float = 20.0
    elbow_min_degrees: float = 70.0
    elbow_max_degrees: float = 140.0
    velocity_advisory_mph: float = 35.0

    class Config:
        env_prefix = "BIOTRACKER_"
        env_file = ".env"
        extra = "ignore"
        frozen = True

    def with_overrides(self, **overrides) -> "AnalysisSettings":
        """Return a validated copy with per-request overrides applied."""
        if not overrides:
            return self
        values = self.model_dump()
        values.update(overrides)
        return AnalysisSettings(**values)


@lru_cache
def get_settings() -> AnalysisSettings:
    """Get cached settings instance."""
    return AnalysisSettings()
