"""Pure validation predicates for interview and session records."""

from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from prepcoach.models.interview import (
    DIFFICULTIES,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_SCHEDULED,
    as_utc,
)

# Forward-only lifecycle; removal is a delete, not a status
ALLOWED_TRANSITIONS = {
    STATUS_SCHEDULED: {STATUS_IN_PROGRESS},
    STATUS_IN_PROGRESS: {STATUS_COMPLETED},
    STATUS_COMPLETED: set(),
}

SPEAKERS = ("ai", "user")


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def is_valid_difficulty(value: Any) -> bool:
    return isinstance(value, str) and value.lower() in DIFFICULTIES


def is_valid_duration(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_valid_score(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and 0 <= value <= 100
    )


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix accepted) into an aware UTC datetime."""
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def has_allowed_extension(filename: str, allowed: Iterable[str]) -> bool:
    suffix = Path(filename or "").suffix.lower()
    return suffix in {ext.lower() for ext in allowed}


def is_time_ordered(timestamps: Iterable[datetime]) -> bool:
    """True when every timestamp is strictly later than the one before it."""
    previous = None
    for moment in timestamps:
        if previous is not None and moment <= previous:
            return False
        previous = moment
    return True
