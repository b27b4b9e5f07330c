"""
Scoring Engine Service

Deterministic rule evaluation over release metrics.

Rules are an ordered list of predicate -> effect pairs rather than
nested conditionals, so each threshold can be read and tested alone.
Deductions are additive; rule order only decides feedback order.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..config import AnalysisSettings, get_settings
from ..domain.analysis import FeedbackItem, ScoringResult, ThrowMetrics

logger = logging.getLogger(__name__)

MAX_SCORE = 100
MIN_SCORE = 0


@dataclass(frozen=True)
class ScoringRule:
    """
    One biomechanical check.

    Attributes:
        key: Stable identifier for logs and tests
        predicate: Fires when it returns True for (metrics, settings)
        deduction: Points removed from the form score (0 = advisory only)
        item: Feedback emitted when the rule fires
        group: Rules sharing a group are mutually exclusive;
               the first match in list order wins
    """
    key: str
    predicate: Callable[[ThrowMetrics, AnalysisSettings], bool]
    deduction: int
    item: FeedbackItem
    group: Optional[str] = None


# =============================================================================
# Rule Table
# =============================================================================

LOW_SEPARATION = ScoringRule(
    key="low_separation",
    predicate=lambda m, s: m.separation_degrees < s.separation_min_degrees,
    deduction=15,
    item=FeedbackItem(
        issue="Low Hip-Shoulder Separation",
        risk="Increased strain on the shoulder labrum due to lack of kinetic chain energy transfer.",
        fix="Focus on keeping your hips open towards the target while keeping your shoulder "
            "closed / back longer. Think 'hips go, then shoulders'.",
    ),
)

ELBOW_TOO_TIGHT = ScoringRule(
    key="elbow_too_tight",
    predicate=lambda m, s: m.elbow_degrees < s.elbow_min_degrees,
    deduction=10,
    item=FeedbackItem(
        issue="Elbow Collapsing / Too Tight",
        risk="High valgus stress on the elbow (UCL injury risk).",
        fix="Keep your elbow up and away from your head. Maintain a 'L' shape or wider angle "
            "at cocking phase.",
    ),
    group="elbow",
)

ELBOW_TOO_STRAIGHT = ScoringRule(
    key="elbow_too_straight",
    predicate=lambda m, s: m.elbow_degrees > s.elbow_max_degrees,
    deduction=10,
    item=FeedbackItem(
        issue="Arm Casting / Too Straight",
        risk="Shoulder impingement and bicep tendonitis.",
        fix="Don't lock your arm out. Keep a slight bend to allow for a whip-like action.",
    ),
    group="elbow",
)

LOW_VELOCITY = ScoringRule(
    key="low_velocity",
    predicate=lambda m, s: m.estimated_velocity_mph < s.velocity_advisory_mph,
    deduction=0,  # Advisory only
    item=FeedbackItem(
        issue="Low Velocity / Poor Leg Drive",
        risk="Over-reliance on arm strength can lead to overuse injuries.",
        fix="Push harder off your back leg. Power comes from the ground up.",
    ),
)

DEFAULT_RULES: tuple[ScoringRule, ...] = (
    LOW_SEPARATION,
    ELBOW_TOO_TIGHT,
    ELBOW_TOO_STRAIGHT,
    LOW_VELOCITY,
)

NO_ISSUES = FeedbackItem(
    issue="None Detected",
    risk="Low injury risk based on this analysis.",
    fix="Great form! Focus on consistency and spot-target accuracy.",
)


class ScoringEngine:
    """
    Scores a throw from its release metrics.

    Usage:
        engine = ScoringEngine()
        result = engine.evaluate(metrics)
        print(result.score, result.issues)
    """

    def __init__(
        self,
        settings: Optional[AnalysisSettings] = None,
        rules: Sequence[ScoringRule] = DEFAULT_RULES,
    ):
        self.settings = settings or get_settings()
        self.rules = tuple(rules)

    def evaluate(self, metrics: ThrowMetrics) -> ScoringResult:
        """
        Run every rule in order.

        Returns:
            ScoringResult with the clamped score and feedback in rule order.
            Exactly one "None Detected" item when no rule fired.
        """
        score = MAX_SCORE
        items: List[FeedbackItem] = []
        fired_groups: set[str] = set()

        for rule in self.rules:
            if rule.group is not None and rule.group in fired_groups:
                continue
            if not rule.predicate(metrics, self.settings):
                continue

            score -= rule.deduction
            items.append(rule.item)
            if rule.group is not None:
                fired_groups.add(rule.group)
            logger.debug(f"Rule {rule.key} fired (-{rule.deduction})")

        if not items:
            items.append(NO_ISSUES)

        return ScoringResult(
            score=max(MIN_SCORE, min(MAX_SCORE, score)),
            feedback_items=tuple(items),
        )
