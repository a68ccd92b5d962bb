"""
Minute-interval helpers for a single calendar day.
"""

from dataclasses import dataclass


@dataclass
class TimeInterval:
    start_minutes: int
    end_minutes: int

    def overlaps(self, other: "TimeInterval") -> bool:
        """Half-open overlap: touching intervals do not overlap."""
        return self.start_minutes < other.end_minutes and self.end_minutes > other.start_minutes


def overlaps_any(interval: TimeInterval, others: list[TimeInterval]) -> bool:
    return any(interval.overlaps(other) for other in others)
