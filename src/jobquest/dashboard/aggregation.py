"""Chart and table views derived from the current job list.

Every function here is pure and cheap; the dashboard calls them on each
render instead of caching results next to the list they came from.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from jobquest.core.models import STATUSES

ALL_STATUSES = "All"

STATUS_COLORS: Dict[str, str] = {
    "Applied": "#3b82f6",
    "Interview": "#f97316",
    "Offer": "#22c55e",
    "Rejected": "#ef4444",
}

Job = Mapping[str, Any]


def parse_created_at(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 createdAt value; None when missing or invalid."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def status_counts(jobs: Iterable[Job]) -> Dict[str, int]:
    """Count per status; every one of the four statuses is present."""
    counter = Counter(job.get("status") for job in jobs)
    return {status: counter.get(status, 0) for status in STATUSES}


def status_chart_data(jobs: Iterable[Job]) -> List[Dict[str, Any]]:
    counts = status_counts(jobs)
    return [{"name": status, "value": counts[status]} for status in STATUSES]


def monthly_counts(jobs: Iterable[Job]) -> List[Dict[str, Any]]:
    """
    Description: Applications per calendar month of createdAt.
    Input: job dicts; records with an unparseable createdAt are skipped
    Output: [{"month": "MM/YY", "count": n}] in chronological order
    """
    groups: Counter[Tuple[int, int]] = Counter()
    for job in jobs:
        created = parse_created_at(job.get("createdAt"))
        if created is None:
            continue
        groups[(created.year, created.month)] += 1

    return [
        {"month": f"{month:02d}/{year % 100:02d}", "count": count}
        for (year, month), count in sorted(groups.items())
    ]


def filter_by_status(jobs: List[Job], status: str) -> List[Job]:
    if status == ALL_STATUSES:
        return list(jobs)
    return [job for job in jobs if job.get("status") == status]
