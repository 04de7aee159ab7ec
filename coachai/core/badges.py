"""
Badge rules.

Each rule looks at the aggregate state after a mutation and names the badge
it grants, or returns None. Rules are independent and monotonic, so the order
of evaluation never changes the outcome.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..models.analysis import AnalysisResult

STREAK_BADGE = "streak_5"
VOLUME_BADGE = "club_5k"
PRECISION_BADGE = "precision_pro"

STREAK_BADGE_DAYS = 5
VOLUME_BADGE_CALORIES = 5000

BADGE_CATALOG: Dict[str, Dict[str, str]] = {
    STREAK_BADGE: {
        "name": "5-Day Streak",
        "icon": "🔥",
        "description": "Train on 5 consecutive days",
    },
    VOLUME_BADGE: {
        "name": "5k Club",
        "icon": "⚡",
        "description": "Burn more than 5000 kcal in total",
    },
    PRECISION_BADGE: {
        "name": "Precision Pro",
        "icon": "🎯",
        "description": "Finish an analyzed session without severe form issues",
    },
}


@dataclass(frozen=True)
class BadgeContext:
    """Aggregate state a rule is evaluated against."""
    streak: int
    total_calories: float
    analysis: Optional[AnalysisResult] = None  # the session that triggered evaluation


BadgeRule = Callable[[BadgeContext], Optional[str]]


def streak_rule(ctx: BadgeContext) -> Optional[str]:
    return STREAK_BADGE if ctx.streak >= STREAK_BADGE_DAYS else None


def volume_rule(ctx: BadgeContext) -> Optional[str]:
    return VOLUME_BADGE if ctx.total_calories > VOLUME_BADGE_CALORIES else None


def precision_rule(ctx: BadgeContext) -> Optional[str]:
    if ctx.analysis is None or not ctx.analysis.form_feedback:
        return None
    return None if ctx.analysis.has_severe_feedback else PRECISION_BADGE


BADGE_RULES: Sequence[BadgeRule] = (streak_rule, volume_rule, precision_rule)


def evaluate_badges(
    badges: Sequence[str],
    ctx: BadgeContext,
    rules: Sequence[BadgeRule] = BADGE_RULES,
) -> List[str]:
    """
    Run every rule and grant badges not already held.

    Args:
        badges: Badges currently held
        ctx: Aggregate state after the mutation
        rules: Rules to run

    Returns:
        New badge list; existing badges keep their order and are never removed
    """
    granted = list(dict.fromkeys(badges))
    for rule in rules:
        badge = rule(ctx)
        if badge is not None and badge not in granted:
            granted.append(badge)
    return granted


def badge_display_name(badge_id: str) -> str:
    """Human-readable badge name; unknown ids are shown as-is."""
    entry = BADGE_CATALOG.get(badge_id)
    return entry["name"] if entry else badge_id
