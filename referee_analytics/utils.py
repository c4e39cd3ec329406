"""General utility helpers shared across modules."""

from __future__ import annotations

import re


def format_duration(seconds: float) -> str:
    """Format seconds as ``1h 02m 03s`` (hours omitted when zero)."""

    total = max(int(round(seconds)), 0)
    hours, remainder = divmod(total, 3600)
    mins, sec = divmod(remainder, 60)
    if hours:
        return f"{hours}h {mins:02d}m {sec:02d}s"
    return f"{mins}m {sec:02d}s"


def slugify(value: str) -> str:
    """Return a filesystem-friendly slug."""

    normalized = value.strip().lower()
    slug = re.sub(r"[^a-z0-9]+", "-", normalized)
    slug = slug.strip("-")
    return slug or "workout"
