"""
PuttLog Backend - Session Aggregates
=====================================

What:  Derived totals for a session: summed attempts, summed makes, accuracy.
When:  Recomputed on every read of a session; never persisted, so displayed
       totals cannot drift from the stored records.

Accuracy:
    round(100 * makes / attempts), rounding halves up (12.5% → 13%), or 0 when
    there are no attempts. Computed with integers so 1/8 and friends round the
    same way on every platform.
"""

from typing import Iterable, Protocol

from puttlog.schemas.session import SessionTotals


class HasCounts(Protocol):
    attempts: int
    makes: int


def accuracy_percent(makes: int, attempts: int) -> int:
    """Whole-number success percentage; 0 when attempts is 0."""
    if attempts <= 0:
        return 0
    return (200 * makes + attempts) // (2 * attempts)


def compute_totals(putts: Iterable[HasCounts]) -> SessionTotals:
    """Sum attempts and makes across putt records and derive overall accuracy."""
    attempts = 0
    makes = 0
    for putt in putts:
        attempts += putt.attempts
        makes += putt.makes
    return SessionTotals(
        attempts=attempts,
        makes=makes,
        accuracy=accuracy_percent(makes, attempts),
    )
