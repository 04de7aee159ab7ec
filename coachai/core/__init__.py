"""Core module - the profile state engine and its rules."""

from .errors import CoachError, ValidationError, StorageError, NotFoundError, InferenceError
from .temporal import Clock, system_clock, local_date, today, same_day, is_next_day
from .series import merge_by_date, add, replace
from .streak import StreakState, classify, passive_recompute, active_increment
from .badges import BadgeContext, BADGE_CATALOG, BADGE_RULES, evaluate_badges
from .validation import Valid, Invalid, validate_analysis_payload

__all__ = [
    'CoachError', 'ValidationError', 'StorageError', 'NotFoundError', 'InferenceError',
    'Clock', 'system_clock', 'local_date', 'today', 'same_day', 'is_next_day',
    'merge_by_date', 'add', 'replace',
    'StreakState', 'classify', 'passive_recompute', 'active_increment',
    'BadgeContext', 'BADGE_CATALOG', 'BADGE_RULES', 'evaluate_badges',
    'Valid', 'Invalid', 'validate_analysis_payload',
]
