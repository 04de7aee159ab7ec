"""
Profile Report - Markdown export of the profile and its history.

Every text field is reduced to printable ASCII before rendering, since the
export targets viewers and converters with restricted font support.
"""

import re
from datetime import date, datetime
from typing import Any, List, Optional, Sequence

from ..core.badges import badge_display_name
from ..core.temporal import Clock, local_date, system_clock
from ..models.profile import Profile
from ..models.session import Session

_NON_PRINTABLE_ASCII = re.compile(r"[^\x20-\x7E]")


def sanitize_ascii(value: Any, fallback: str = "") -> str:
    """
    Convert a value to printable ASCII text.

    None becomes `fallback`; containers become an empty string; every
    character outside 0x20-0x7E is stripped and the result is trimmed.
    """
    if value is None:
        return fallback
    if isinstance(value, (dict, list, tuple, set)):
        return ""
    return _NON_PRINTABLE_ASCII.sub("", str(value)).strip()


def _cell(value: Any, fallback: str = "") -> str:
    # Pipes would break the Markdown table
    return sanitize_ascii(value, fallback).replace("|", "/")


def _table(headers: Sequence[str], rows: List[Sequence[str]]) -> List[str]:
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join("---" for _ in headers) + " |",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return lines


def _minutes(seconds: Optional[float]) -> str:
    return f"{round((seconds or 0) / 60)} min"


def _format_number(value: float) -> str:
    return f"{value:g}"


def report_filename(on: date) -> str:
    return f"CoachAI_Data_{on.isoformat()}.md"


def render_profile_report(
    profile: Profile,
    sessions: Sequence[Session],
    clock: Clock = system_clock,
) -> str:
    """
    Render the profile, weight log, session history and manual logs as Markdown.

    Args:
        profile: Profile snapshot
        sessions: Sessions, most recent first
        clock: Time source for the "generated on" line

    Returns:
        str: Markdown document containing only printable ASCII and newlines
    """
    generated_at: datetime = clock()
    lines: List[str] = [
        f"# {sanitize_ascii('Coach.ai - Athlete Profile')}",
        "",
        f"Generated on: {sanitize_ascii(generated_at.strftime('%Y-%m-%d %H:%M'))}",
        "",
        "## Profile Overview",
        "",
        f"- Name: {sanitize_ascii(profile.name, 'Athlete') or 'Athlete'}",
        f"- Current Streak: {profile.streak} Days",
        f"- Weight: {sanitize_ascii(profile.weight, '--')} kg",
        f"- Total Training: {profile.total_hours:.1f} hrs",
        f"- Age: {sanitize_ascii(profile.age, '--')} years",
        f"- Total Burn: {_format_number(profile.total_calories)} kcal",
        f"- Program: {sanitize_ascii(profile.program, 'Standard Program')}",
    ]

    if profile.badges:
        badges = ", ".join(sanitize_ascii(badge_display_name(b)) for b in profile.badges)
        lines.append(f"- Badges: {badges}")

    if profile.weight_history:
        lines += ["", "## Weight Log", ""]
        lines += _table(
            ["Date", "Weight"],
            [[_cell(w.date.isoformat()), _cell(f"{_format_number(w.weight)} kg")] for w in profile.weight_history],
        )

    if sessions:
        rows = []
        for session in sessions:
            summary = session.data.session_summary
            rows.append([
                _cell(local_date(session.created_at).isoformat()),
                _cell(summary.sport),
                _minutes(summary.estimated_duration_sec),
                f"{_cell(_format_number(summary.calories_estimate), '0')} kcal",
                f"{_format_number(summary.score)}/100" if summary.score is not None else "N/A",
            ])
        lines += ["", "## Workout History", ""]
        lines += _table(["Date", "Sport", "Duration", "Burn", "Score"], rows)

    if profile.manual_activity_log:
        rows = [
            [
                _cell(m.date.isoformat()),
                _cell(m.exercise),
                _minutes(m.duration_sec),
                f"{_cell(_format_number(m.calories), '0')} kcal",
                _cell(m.intensity_level),
            ]
            for m in profile.manual_activity_log
        ]
        lines += ["", "## Manual Activity Logs", ""]
        lines += _table(["Date", "Activity", "Duration", "Burn", "Intensity"], rows)

    return "\n".join(lines) + "\n"
