from __future__ import annotations


def growth_rate(*, current: int | float, previous: int | float) -> int:
    """Percent change between two periods, rounded to an integer."""
    if previous == 0:
        return 100 if current > 0 else 0
    return round((current - previous) / previous * 100)
