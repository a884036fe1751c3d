"""Human-relative age labels for pull requests."""

from datetime import datetime, timedelta, timezone
from typing import Optional


def calculate_age(created_at: datetime, now: Optional[datetime] = None) -> str:
    """Turn a creation timestamp into a coarse label.

    Examples: "3 days ago", "1 day ago", "5 hours ago", "now".
    Timestamps in the future are reported as "now".

    Args:
        created_at: When the pull request was opened. Naive values are
            treated as UTC.
        now: Reference time (default: current UTC time)

    Returns:
        Age label string
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = now - created_at

    diff_days = elapsed // timedelta(days=1)
    if diff_days >= 1:
        return "1 day ago" if diff_days == 1 else f"{diff_days} days ago"

    diff_hours = elapsed // timedelta(hours=1)
    if diff_hours >= 1:
        return f"{diff_hours} hours ago"

    return "now"
