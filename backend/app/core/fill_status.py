"""
Fill level -> status bucket ladder.

One representation for the four-way partition at 25/50/75. Every write path derives the
bucket through fill_status_for(), so fill_level and status never disagree.
"""
from enum import Enum

FILL_LEVEL_MIN = 0
FILL_LEVEL_MAX = 100

# Bins at or above this level need collection and raise an alert
ALERT_THRESHOLD = 75


class FillStatus(str, Enum):
    EMPTY = "empty"
    HALF = "half"
    THREE_QUARTER = "three-quarter"
    FULL = "full"


# Evaluated top-down: first threshold the level reaches wins
_LADDER: tuple[tuple[int, FillStatus], ...] = (
    (75, FillStatus.FULL),
    (50, FillStatus.THREE_QUARTER),
    (25, FillStatus.HALF),
)


def fill_status_for(fill_level: int) -> FillStatus:
    for threshold, status in _LADDER:
        if fill_level >= threshold:
            return status
    return FillStatus.EMPTY


def needs_collection(fill_level: int) -> bool:
    return fill_level >= ALERT_THRESHOLD
