"""
Services Layer

Business logic services for throw analysis.
These services orchestrate domain models and the numeric pipeline stages.
"""

from .temporal_smoother import OneEuroFilter, TemporalSmoother
from .geometry import GeometryEngine
from .kinematic_analyzer import KinematicAnalyzer
from .scoring_engine import ScoringEngine, ScoringRule
from .report_assembler import ReportAssembler
from .throw_analyzer import ThrowAnalyzer

__all__ = [
    "OneEuroFilter",
    "TemporalSmoother",
    "GeometryEngine",
    "KinematicAnalyzer",
    "ScoringEngine",
    "ScoringRule",
    "ReportAssembler",
    "ThrowAnalyzer",
]
